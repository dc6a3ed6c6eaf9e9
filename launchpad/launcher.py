#===============================================================================
#  Launchpad_Application_Catalog | launcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Launch / stop / is-running primitives for catalog entries.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

import psutil

from .census import census
from .models import CatalogEntry
from .paths import exe_basename

logger = logging.getLogger(__name__)


def launch_app(entry: CatalogEntry) -> None:
    """Start an entry's executable, detached, from its own folder."""
    if not entry.has_valid_path:
        raise RuntimeError(f"No executable to launch for '{entry.name}'.")

    target = Path(entry.path.strip())
    kwargs = {}
    if sys.platform.startswith("win"):
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True
    subprocess.Popen(
        [str(target)],
        cwd=str(target.parent),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        **kwargs,
    )
    logger.info("Launched %s (%s)", entry.name, target)


def stop_app(entry: CatalogEntry) -> int:
    """Terminate every process running the entry's executable. Returns the count."""
    exe_name = exe_basename(entry.path)
    if not exe_name:
        raise RuntimeError(f"No executable to stop for '{entry.name}'.")

    stopped = 0
    for proc in psutil.process_iter(["name"]):
        try:
            if (proc.info.get("name") or "").lower() != exe_name:
                continue
            proc.terminate()
            stopped += 1
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            logger.warning("Could not stop pid %s for %s: %s", proc.pid, entry.name, e)
    logger.info("Stopped %d process(es) for %s", stopped, entry.name)
    return stopped


def is_app_running(path: str) -> bool:
    name = exe_basename(path)
    return bool(name) and name in census()
