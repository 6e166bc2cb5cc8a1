"""Logging configuration helpers."""

import logging

_FORMAT = "%(levelname)s: %(name)s: %(message)s"


class _ComponentFormatter(logging.Formatter):
    """Prefix records carrying a ``component`` extra with that tag."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        component = getattr(record, "component", None)
        if component:
            return f"[{component}] {message}"
        return message


def configure_logging() -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger("outsider_gallery")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(_ComponentFormatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
