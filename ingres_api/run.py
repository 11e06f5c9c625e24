import uvicorn

from ingres_api.app.config import settings
from ingres_api.app.utils.logger import setup_logger


def main():
    """Run the chat API with uvicorn."""
    logger = setup_logger(log_dir=settings.LOG_DIR, level=settings.LOG_LEVEL)
    logger.info("API listening on http://localhost:%s", settings.PORT)
    if settings.STATIC_DIR:
        logger.info("Frontend served from %s at http://localhost:%s/", settings.STATIC_DIR, settings.PORT)

    uvicorn.run(
        "ingres_api.app.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
