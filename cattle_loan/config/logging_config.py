"""
Logging configuration for the cattle loan application.

Loggers live under the ``cattle_loan`` hierarchy so handlers installed by
``configure_logging`` apply to every module.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from cattle_loan.config.settings import LoggingSettings

ROOT_LOGGER_NAME = "cattle_loan"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the application hierarchy.
    
    Args:
        name: Module name, usually ``__name__``
        
    Returns:
        logging.Logger: Logger for the module
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(config: Optional[LoggingSettings] = None, force: bool = False) -> logging.Logger:
    """
    Install console and file handlers on the application root logger.
    
    Args:
        config: Logging settings, defaults to the global settings
        force: Replace handlers installed by an earlier call
        
    Returns:
        logging.Logger: The configured application root logger
    """
    global _configured
    
    if config is None:
        from cattle_loan.config import settings
        config = settings.logging
    
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    
    # If logger is already configured, return it
    if _configured and not force:
        return logger
    
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    
    log_level = getattr(logging, config.level.upper(), logging.INFO)
    logger.setLevel(log_level)
    
    formatter = logging.Formatter(config.format)
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    )
    
    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)
    
    if config.file_enabled:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_dir / "cattle_loan.log",
            maxBytes=10485760,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)
    
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    
    _configured = True
    return logger
