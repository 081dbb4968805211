import sentry_sdk
from loguru import logger


class EmojiCacheError(Exception):
    pass


class TransportError(EmojiCacheError):
    """Raised when the remote emoji source could not be reached or misbehaved."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _log_notes(error: BaseException) -> None:
    for note in getattr(error, "__notes__", []):
        logger.error(note)


def handle_error(error: BaseException) -> None:
    logger.opt(exception=error).error("unhandled {}", type(error).__name__)
    _log_notes(error)
    sentry_sdk.capture_exception(error)


def report_transport_error(error: TransportError) -> None:
    # Transport failures are retried on the next lookup, so no traceback here.
    logger.warning("emoji source unavailable: {}", error)
    _log_notes(error)
    sentry_sdk.capture_exception(error)
