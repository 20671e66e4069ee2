# dls_api/log.py
from __future__ import annotations

import logging
import os
from typing import Optional

from dls_api.config import LOG_FILE, LOG_LEVEL

LOG_DIR = "logs"


def get_logger(name: str = "dls", log_file: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    # Handlers are attached once per logger name
    if not logger.handlers:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        c_handler = logging.StreamHandler()
        c_handler.setFormatter(formatter)
        logger.addHandler(c_handler)

        log_file = log_file or LOG_FILE or None
        if log_file:
            os.makedirs(LOG_DIR, exist_ok=True)
            f_handler = logging.FileHandler(os.path.join(LOG_DIR, log_file), encoding="utf-8")
            f_handler.setFormatter(formatter)
            logger.addHandler(f_handler)

    logger.propagate = False
    return logger
