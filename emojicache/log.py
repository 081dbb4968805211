from __future__ import annotations

import inspect
import logging
import os
import sys
from typing import TYPE_CHECKING, override

import sentry_sdk
from loguru import logger

if TYPE_CHECKING:
    from emojicache.config import Config


# httpx logs through the standard logging module; route it into Loguru.
# This handler is taken unchanged from Loguru's README:
# https://github.com/Delgan/loguru/tree/0.7.3#entirely-compatible-with-standard-logging
class _InterceptHandler(logging.Handler):
    @override
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message.
        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup(config: Config) -> None:
    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    logger.remove()
    logger.add(
        sys.stderr,
        # $LOGURU_LEVEL is only read at import time, so apply it here as well.
        level=os.getenv("LOGURU_LEVEL") or os.getenv("LOG_LEVEL") or "INFO",
        filter={
            # Every emoji lookup is a REST request, which httpx logs under INFO.
            "httpx": "WARNING",
            "httpcore": "WARNING",
        },
    )

    if config.sentry_dsn is not None:
        sentry_sdk.init(
            dsn=config.sentry_dsn.get_secret_value(),
            traces_sample_rate=1.0,
        )
        logger.debug("sentry error reporting enabled")
