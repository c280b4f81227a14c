"""
Logging helpers shared by the deedseal modules.

Every module logs through a named logger under the ``deedseal`` namespace.
The handler is attached lazily the first time a message is emitted, and the
level comes from the DEEDSEAL_LOG_LEVEL environment variable.
"""

import logging
import os

from deedseal.config import LOG_LEVEL_ENV

ROOT_LOGGER_NAME = "deedseal"


def _setup_logging() -> logging.Logger:
    """Attach the structured stream handler to the package root logger once."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()

        level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
        root.setLevel(getattr(logging, level_name, logging.INFO))

        formatter = logging.Formatter(
            "[%(asctime)s.%(msecs)03d] %(levelname)s [%(name)s]: %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a child logger, e.g. get_logger("aead") -> deedseal.aead."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log(logger: logging.Logger, level: str, message: str, **kwargs) -> None:
    """Structured logging with optional key=value context."""
    _setup_logging()
    log_method = getattr(logger, level.lower(), logger.info)

    if kwargs:
        context = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        message = f"{message} | {context}"

    log_method(message)
