import logging
import os
from datetime import datetime
from typing import Optional, Union

LOG_PREFIX = "ingres_"
KEEP_LOG_FILES = 10


def setup_logger(name: str = "ingres_api", log_dir: Optional[Union[str, os.PathLike]] = None,
                 level: Union[int, str] = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        log_date = datetime.now().strftime("%Y-%m-%d")
        log_path = os.path.join(log_dir, f"{LOG_PREFIX}{log_date}.log")

        log_files = sorted(
            [f for f in os.listdir(log_dir) if f.startswith(LOG_PREFIX) and f.endswith(".log")],
            reverse=True
        )
        for old_file in log_files[KEEP_LOG_FILES:]:
            os.remove(os.path.join(log_dir, old_file))

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
