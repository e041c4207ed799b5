"""Logging configuration for the Athens cooling map API."""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

# Create logs directory if it doesn't exist
LOGS_DIR = Path(__file__).parent.parent / "logs"
LOGS_DIR.mkdir(exist_ok=True)

# Log file paths
API_LOG_FILE = LOGS_DIR / "api.log"
LLM_LOG_FILE = LOGS_DIR / "llm.log"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_configured = False


def _rotating_handler(path: Path, fmt: str) -> RotatingFileHandler:
    """Rotating file handler, 10MB max, keep 5 backups."""
    handler = RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging():
    """Configure logging for the application."""
    global _configured

    root_logger = logging.getLogger()
    if _configured:
        return root_logger

    root_logger.setLevel(logging.INFO)

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(_rotating_handler(API_LOG_FILE, LOG_FORMAT))

    # Upstream completion calls also go to their own file
    llm_logger = logging.getLogger('llm')
    llm_logger.addHandler(
        _rotating_handler(LLM_LOG_FILE, '%(asctime)s - [LLM] - %(levelname)s - %(message)s')
    )
    llm_logger.setLevel(logging.INFO)

    # Reduce noise from libraries
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)

    _configured = True
    return root_logger


# Convenience function to get logger
def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
