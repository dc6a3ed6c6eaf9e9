#===============================================================================
#  Launchpad_Application_Catalog | paths.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Path quality helpers shared by the scanners, the merge and the launcher.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from pathlib import Path, PureWindowsPath

from .constants import EXECUTABLE_SUFFIXES


def looks_executable(path: str) -> bool:
    """True if the path has an executable suffix (no disk access)."""
    return bool(path) and path.strip().lower().endswith(EXECUTABLE_SUFFIXES)


def is_executable_path(path: str) -> bool:
    """A path is valid for merging only if it is an existing executable file."""
    if not looks_executable(path):
        return False
    try:
        return Path(path.strip()).is_file()
    except OSError:
        return False


def exe_basename(path: str) -> str:
    """Lower-cased file name; accepts both Windows and POSIX separators."""
    if not path:
        return ""
    return PureWindowsPath(path.strip()).name.lower()
