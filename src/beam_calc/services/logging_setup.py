# path: src/beam_calc/services/logging_setup.py
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "beam_calc"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    log_dir: str = "logs",
    log_name: str = "app.log",
    level: int = logging.INFO,
    console: bool = True,
) -> logging.Logger:
    """
    Configura el logger raíz del paquete. Los módulos del motor usan
    logging.getLogger(__name__) y heredan estos handlers.
    Llamadas repetidas devuelven el mismo logger sin agregar handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, log_name)
    fmt = logging.Formatter(LOG_FORMAT)

    # el archivo guarda todo lo que pase el nivel del logger
    fh = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    if console:
        sh = logging.StreamHandler()
        sh.setLevel(max(level, logging.INFO))
        sh.setFormatter(fmt)
        logger.addHandler(sh)

    logger.info("Logging de análisis inicializado (nivel %s). Archivo: %s",
                logging.getLevelName(level), log_path)
    return logger
