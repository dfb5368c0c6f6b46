"""Logging configuration helpers."""

import logging

LOGGER_NAME = "avo_nutrition"
_HANDLER_NAME = "avo_nutrition.stream"
_FORMAT = "%(levelname)s: %(name)s: %(message)s"
_DEBUG_FORMAT = "%(asctime)s %(levelname)s: %(name)s:%(lineno)d: %(message)s"


def configure_logging(*, debug: bool = False) -> logging.Logger:
    """Attach the application stream handler and set the level.

    Safe to call once per app: the handler is added only once, while the
    level and format follow the latest ``debug`` flag.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    handler = next(
        (item for item in logger.handlers if item.get_name() == _HANDLER_NAME), None
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(_DEBUG_FORMAT if debug else _FORMAT))

    logger.propagate = False
    return logger
