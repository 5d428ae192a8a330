# museum/utils/logging.py
import logging

from museum.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def sql_log_level(level: str) -> int:
    # zapytania SQL widoczne tylko przy LOG_LEVEL=DEBUG
    return logging.INFO if level.upper() == "DEBUG" else logging.WARNING


logging.basicConfig(level=LOG_LEVEL, format=_FORMAT)
logging.getLogger("sqlalchemy.engine").setLevel(sql_log_level(LOG_LEVEL))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
