import logging
import os
from logging.handlers import RotatingFileHandler

from config import LOG_LEVEL, LOG_PATH


def setup_api_logger(log_path: str | None = None) -> logging.Logger:
    """Setup and return the application logger.

    Creates a rotating file handler at `log_path` (defaults to LOG_PATH, then
    ./logs/api.log) on the `tripplanner` logger, so every `tripplanner.*`
    module logger writes to the same file. Returns `tripplanner.api`.
    """
    if log_path is None:
        log_path = LOG_PATH
    if log_path is None:
        base = os.path.abspath(os.path.dirname(__file__))
        logs_dir = os.path.join(base, '..', 'logs')
        os.makedirs(logs_dir, exist_ok=True)
        log_path = os.path.join(logs_dir, 'api.log')
    else:
        os.makedirs(os.path.dirname(os.path.abspath(log_path)), exist_ok=True)

    root = logging.getLogger('tripplanner')
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    # avoid adding multiple handlers if called multiple times
    if not root.handlers:
        handler = RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding='utf-8')
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        root.addHandler(handler)

    return logging.getLogger('tripplanner.api')
