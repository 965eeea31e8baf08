from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logger(name: str = "oztail", log_file: Optional[str] = None,
                 level: int = logging.INFO) -> logging.Logger:
    """Return ``name``'s logger with a console handler and optional file handler.

    Calling it again only updates the level; handlers are attached once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


__all__ = ["LOG_FORMAT", "setup_logger"]
