"""Global logging and error handling utilities"""
import sys
import logging
import traceback

from constants import LOG_FORMAT

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

_error_reporter = None
_logger = logging.getLogger('errors')


def configure_logging(verbose: bool = False):
    """Configure root logging for a host application

    WARNING and above by default, DEBUG when verbose. The engine never calls
    this itself; hosts do, once, at startup.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def set_error_reporter(reporter):
    """Register a host callback used to show errors to the user

    Args:
        reporter: Callable (title, message) -> None, or None to unregister
    """
    global _error_reporter
    _error_reporter = reporter


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle exceptions with optional user report in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to report (optional)
        title: Title for the report

    In DEBUG_MODE:
        - Just raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Logs the full traceback
        - Hands the user message to the registered error reporter
        - Then raises the exception
    """
    if DEBUG_MODE:
        raise e

    tb = traceback.format_exc()
    _logger.error(f"{title}: {tb}")

    message = user_message if user_message else str(e)
    if _error_reporter:
        _error_reporter(title, message)
    else:
        _logger.error(f"ERROR REPORT (no reporter): {title} - {message}")

    raise e
