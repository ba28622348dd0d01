# --------------------------------------------------------------
# File: logger.py
# Description: Logger estructurado común a los módulos de la lista negra.
# --------------------------------------------------------------
"""Fábrica de loggers con salida JSON por línea en UTC."""

import json
import logging
import os
import sys
import time
from typing import Optional

from blacklist import config


class JsonFormatter(logging.Formatter):
    """Serializa cada registro como un objeto JSON en una sola línea."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def get_logger(name: str = "blacklist", level: Optional[str] = None, to_file: Optional[str] = None) -> logging.Logger:
    """Devuelve un logger configurado una única vez por nombre.

    Args:
        name (str): Nombre jerárquico del logger.
        level (Optional[str]): Nivel de log; por defecto ``LOG_LEVEL``.
        to_file (Optional[str]): Fichero adicional; por defecto ``LOG_FILE``.

    Returns:
        logging.Logger: Logger listo para usar.

    """

    logger = logging.getLogger(name)
    logger.setLevel(level or config.LOG_LEVEL)

    if not logger.handlers:
        formatter = JsonFormatter(datefmt="%Y-%m-%dT%H:%M:%SZ")
        formatter.converter = time.gmtime

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        target = to_file or config.LOG_FILE
        if target:
            os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
            file_handler = logging.FileHandler(target, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
