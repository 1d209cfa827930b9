# courtside/config/logging_config.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from courtside.config.settings import LoggingSettings

ROOT_LOGGER_NAME = "courtside"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the courtside namespace

    Args:
        name: Module name, usually __name__

    Returns:
        Logger whose records propagate to the courtside root logger
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(config: LoggingSettings, level: Optional[str] = None) -> logging.Logger:
    """
    Set up console and rotating file handlers on the courtside root logger

    Calling this more than once only adjusts the level.

    Args:
        config: Logging settings
        level: Optional level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured root logger
    """
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    log_level = getattr(logging, (level or config.level).upper(), logging.INFO)
    logger.setLevel(log_level)

    # If logger is already configured, return it
    if _configured:
        return logger

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    )
    simple_formatter = logging.Formatter(config.format)

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    if config.file_enabled:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_dir / "courtside.log",
            maxBytes=10485760,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    _configured = True
    return logger
