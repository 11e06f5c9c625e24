from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from ingres_api.app import deps
from ingres_api.app.config import Settings
from ingres_api.app.exceptions import ChatError, chat_error_handler, generic_exception_handler
from ingres_api.app.routers import chat, health
from ingres_api.app.services.chat_service import ChatService


def create_app(settings: Optional[Settings] = None, chat_service: Optional[ChatService] = None) -> FastAPI:
    settings = settings or Settings()
    owns_service = chat_service is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_service:
            app.state.chat_service.close()

    app = FastAPI(title="INGRES Chat API", version="1.0.0", lifespan=lifespan)
    app.state.chat_service = chat_service or deps.build_chat_service(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ChatError, chat_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(chat.router, prefix="/api", tags=["chat"])
    app.include_router(health.router, prefix="/api", tags=["health"])

    if settings.STATIC_DIR:
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app
