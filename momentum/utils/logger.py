import logging
import logging.config
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def setup_logger(config=None, log_file: Optional[str] = None,
                 max_bytes: int = 10_000_000, backup_count: int = 5):
    """Настройка корневого логгера: из конфигурации или файлом напрямую"""
    if config is not None:
        logging.config.dictConfig(config.get_logging_config())
        return logging.getLogger()

    logger = logging.getLogger()
    logger.setLevel(logging.INFO)
    if log_file:
        Path(log_file).parent.mkdir(exist_ok=True, parents=True)
        handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
