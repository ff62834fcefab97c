"""
Logger
콘솔 + 파일 로깅 (컴포넌트별 child logger)
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from datetime import datetime

from config.settings import settings

ROOT_LOGGER_NAME = "trendbot"

LOG_FILE = os.path.join(settings.LOG_DIR, f"{ROOT_LOGGER_NAME}_{datetime.now().strftime('%Y%m%d')}.log")


def setup_logger(name: str = ROOT_LOGGER_NAME, log_file: str = LOG_FILE) -> logging.Logger:
    """
    Console(INFO+) and rotating file(DEBUG+) handlers on the bot's root logger.

    Format: [Timestamp] [Level] [Component] Message
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    # 10MB, 5 backups
    file_handler = RotatingFileHandler(
        log_file, maxBytes=10*1024*1024, backupCount=5, encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)
    logger.addHandler(console_handler)

    return logger


def get_logger(component: str) -> logging.Logger:
    """trendbot.<component> - 루트 핸들러로 전파"""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")


logger = setup_logger()
