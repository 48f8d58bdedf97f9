"""Logging setup for the ``beancheck`` logger hierarchy."""

import logging

from beancheck.config.models import LoggingConfig

_HANDLER_NAME = "beancheck"


def configure_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Apply a LoggingConfig to the ``beancheck`` logger.

    Attaches a single stream handler; calling again only updates the level
    and format.

    Args:
        config: Logging settings (defaults when omitted)

    Returns:
        The configured ``beancheck`` logger
    """
    config = config or LoggingConfig()
    root = logging.getLogger("beancheck")
    root.setLevel(config.level.value)

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)
    handler.setFormatter(logging.Formatter(config.format))
    return root
