import logging
import sys
from environs import Env
from .log_filters import TruncatingFilter

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

# Package loggers and the argument length their records are cut to (None: no filter)
PACKAGE_LOGGERS = {
    "link_budget.application.solver": 160,
    "link_budget.application.session": None,
    "link_budget.infrastructure.storage": None,
    "link_budget.main": None,
}


def _resolve_level(env: Env) -> int:
    """LOGGING_LEVEL name, overridden by DEBUG=true."""
    if env.bool("DEBUG", default=False):
        return logging.DEBUG

    level_name = env.str("LOGGING_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {level_name}")
    return level


def setup_logging(env: Env) -> None:
    """Set up logging configuration."""
    if logging.root.handlers:  # already configured
        return

    level = _resolve_level(env)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)

    for name, max_length in PACKAGE_LOGGERS.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if max_length is not None:
            logger.addFilter(TruncatingFilter(max_length=max_length))

    # Loggers created before this call still sit at NOTSET
    for name in list(logging.Logger.manager.loggerDict):
        logger = logging.getLogger(name)
        if logger.level == logging.NOTSET:
            logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
