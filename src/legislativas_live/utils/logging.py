import logging

from legislativas_live.settings import LOG_LEVEL

ROOT_LOGGER = "legislativas-live"
LOG_FORMAT = "[%(asctime)s] %(name)s %(levelname)s: %(message)s"


def _configure_root(level: str = LOG_LEVEL) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(getattr(logging, level, logging.INFO))
    return root


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Logger under the project's root logger.

    Only the root logger carries a handler; ``"results"`` and
    ``"legislativas-live.results"`` name the same child, which propagates to it.
    """
    _configure_root()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
