import logging
import sys
from typing import Iterable, Optional

APP_LOGGER_NAME = "jewelry_api"


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def setup_logging(
    level: int = logging.INFO,
    allowed_namespaces: Optional[Iterable[str]] = None,
) -> logging.Logger:
    """Attach a stdout handler to the application logger.

    Modules log through ``logging.getLogger(__name__)``, which yields loggers
    such as ``jewelry_api.features.sales.service``; those inherit the level and
    handler configured here. Calling this more than once does not stack
    handlers.

    Args:
        level: Level for the ``jewelry_api`` logger.
        allowed_namespaces: Optional logger name prefixes; when given, only
            records from those namespaces reach the console.

    Returns:
        The configured application logger.
    """
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(level)

    for handler in list(app_logger.handlers):
        if getattr(handler, "_jewelry_console", False):
            app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler._jewelry_console = True
    if allowed_namespaces:
        console_handler.addFilter(NamespaceFilter(list(allowed_namespaces)))
    app_logger.addHandler(console_handler)

    # Tortoise logs every query at DEBUG; keep it quiet unless asked for
    logging.getLogger("tortoise").setLevel(logging.WARNING)
    return app_logger
