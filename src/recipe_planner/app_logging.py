"""Logging setup for the recipe planner service."""

import logging

# Each generation request is logged by httpx at INFO; a feed makes several.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: int | str = logging.INFO) -> None:
    """Send ``recipe_planner.*`` records to one stream handler at ``level``.

    Safe to call once per app instance; later calls only adjust the level.
    """
    logger = logging.getLogger("recipe_planner")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
