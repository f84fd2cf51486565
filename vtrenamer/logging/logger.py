import logging
import sys

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Appends keyword context passed to Log.* calls as `key=value` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{line} | {pairs}"


class Log:
    """Process-wide logger for the renamer; context goes in as keyword arguments."""

    _logger: logging.Logger = logging.getLogger("vtrenamer")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                ContextFormatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        """Log an informational message."""
        cls._logger.info(message, extra=context)

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=context)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=context)

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=context)

    @classmethod
    def exception(cls, message: str, **context: object) -> None:
        """Log an error with the active exception's traceback."""
        cls._logger.exception(message, extra=context)
