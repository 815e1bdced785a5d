# path: src/beam_statics/services/logging_setup.py
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

ROOT_LOGGER = "beam_statics"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    log_dir: Optional[str] = "logs",
    log_name: str = "beam_statics.log",
    level: int = logging.INFO,
    console: bool = True,
) -> logging.Logger:
    """
    Configura el logger raíz del paquete. Los módulos del motor usan
    logging.getLogger(__name__) y heredan estos handlers.

    log_dir=None => sin archivo (sólo consola).
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Evitar duplicar handlers si se llama más de una vez
    if logger.handlers:
        return logger

    fmt = logging.Formatter(LOG_FORMAT)
    log_path = None

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, log_name)
        fh = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    if console:
        sh = logging.StreamHandler()
        sh.setLevel(level)
        sh.setFormatter(fmt)
        logger.addHandler(sh)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.info("Logging inicializado. Archivo: %s", log_path or "(sin archivo)")
    return logger


def reset_logging() -> None:
    """Cierra y quita los handlers instalados por setup_logging."""
    logger = logging.getLogger(ROOT_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
