#===============================================================================
#  Launchpad_Application_Catalog | log_setup.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Console + file logging under <data_dir>/logs.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from pathlib import Path

from .constants import LOG_FILE_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HANDLER_TAG = "_launchpad_handler"


def configure_logging(logs_dir: Path, level: str = "INFO") -> Path:
    """Attach console and file handlers to the package logger once."""
    logger = logging.getLogger("launchpad")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    log_path = logs_dir / LOG_FILE_NAME
    if any(getattr(h, _HANDLER_TAG, False) for h in logger.handlers):
        return log_path

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    setattr(console, _HANDLER_TAG, True)
    logger.addHandler(console)

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        logger.warning("File logging disabled (%s): %s", log_path, e)
    else:
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_TAG, True)
        logger.addHandler(file_handler)
    return log_path
