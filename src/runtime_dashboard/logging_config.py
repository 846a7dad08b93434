"""
Centralized logging configuration for the runtime dashboard.

Provides consistent logging across the web server and its responders with:
- Component/method context in every log
- File, line number, and function name in every log
- Optional file output alongside the console
"""
import logging
import sys
import inspect
from pathlib import Path
from typing import Optional


class StructuredLogger:
    """
    Prefixes every message with component, caller location and key=value extras.
    """

    def __init__(self, name: str, component: str = None):
        """
        Initialize structured logger.

        Args:
            name: Logger name (usually __name__)
            component: Component name (e.g., "AppServer", "DashboardConfig")
        """
        self._logger = logging.getLogger(name)
        self.component = component or name.split('.')[-1]

    def _get_caller_info(self) -> tuple[str, int, str]:
        """Get caller's file, line number, and function name."""
        frame = inspect.currentframe()
        try:
            # Skip: _get_caller_info -> _format_context -> debug/info/... -> caller
            caller_frame = frame.f_back.f_back.f_back
            if caller_frame:
                filename = Path(caller_frame.f_code.co_filename).name
                return filename, caller_frame.f_lineno, caller_frame.f_code.co_name
        finally:
            del frame
        return "unknown", 0, "unknown"

    def _format_context(self, method: str = None, **kwargs) -> str:
        """Build context prefix for log messages with file/line/function."""
        filename, lineno, funcname = self._get_caller_info()

        parts = [self.component]
        if method:
            parts.append(method)

        full_context = f"[{'.'.join(parts)}] [{filename}:{lineno}:{funcname}]"

        if kwargs:
            extras = ' '.join(f"{k}={v}" for k, v in kwargs.items())
            return f"{full_context} ({extras})"

        return full_context

    def debug(self, msg: str, method: str = None, **kwargs):
        """Log debug message with context."""
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(f"{self._format_context(method, **kwargs)} {msg}")

    def info(self, msg: str, method: str = None, **kwargs):
        """Log info message with context."""
        self._logger.info(f"{self._format_context(method, **kwargs)} {msg}")

    def warning(self, msg: str, method: str = None, **kwargs):
        """Log warning message with context."""
        self._logger.warning(f"{self._format_context(method, **kwargs)} {msg}")

    def error(self, msg: str, method: str = None, exc_info: bool = False, **kwargs):
        """Log error message with context."""
        self._logger.error(f"{self._format_context(method, **kwargs)} {msg}", exc_info=exc_info)

    def critical(self, msg: str, method: str = None, exc_info: bool = False, **kwargs):
        """Log critical message with context."""
        self._logger.critical(f"{self._format_context(method, **kwargs)} {msg}", exc_info=exc_info)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None
):
    """
    Configure logging for the entire application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to
    """
    log_format = "%(asctime)s.%(msecs)03d [%(levelname)s] - %(message)s"
    date_format = "%H:%M:%S"

    numeric_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    root_logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root_logger.addHandler(file_handler)

    # Access logging goes through the app's log_function instead
    logging.getLogger("tornado.access").setLevel(logging.WARNING)

    root_logger.info(f"Logging initialized at {level} level")
    if log_file:
        root_logger.info(f"Logging to file: {log_file}")


def get_logger(name: str, component: str = None) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)
        component: Component name for context

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name, component=component)
