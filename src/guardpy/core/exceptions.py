"""Custom exceptions for guardpy."""

from guardpy.core import config

logger = config.get_logger()


class LoggedException(Exception):
    """Base class that automatically logs messages."""

    def __init__(self, message: str) -> None:
        """Initialize a new instance of the LoggedException class.

        Args:
            message: The message to display.
        """
        logger.exception(message)
        super().__init__(message)


class GuardpyError(LoggedException):
    """Base class for errors that abort a guardpy run."""

    pass


class ParseError(GuardpyError):
    """A log line did not match any recognized record shape."""

    pass


class SequenceError(GuardpyError):
    """The ordered events do not describe a consistent duty/rest timeline."""

    pass


class EmptyResultError(GuardpyError):
    """No actors or no rest intervals were found, nothing can be aggregated."""

    pass


class InvalidFileTypeError(GuardpyError):
    """Guardpy did not expect this file extension."""

    pass


class EmptyDirectoryError(GuardpyError):
    """No .txt or .log files were found in the directory."""

    pass
