#===============================================================================
#  Launchpad_Application_Catalog | census.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Snapshot of running executable names, used to stamp catalog entries.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import Set

import psutil

logger = logging.getLogger(__name__)


def census() -> Set[str]:
    """Lower-cased base names of every running executable.

    A failed query returns an empty set; a stale running state is better
    than a failed scan.
    """
    names: Set[str] = set()
    try:
        for proc in psutil.process_iter(["name"]):
            try:
                name = proc.info.get("name") or ""
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
            if name:
                names.add(name.lower())
    except (psutil.Error, OSError) as e:
        logger.warning("Process census failed: %s", e)
        return set()
    return names
