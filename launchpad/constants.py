#===============================================================================
#  Launchpad_Application_Catalog | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Central place for file naming conventions, scan sources and scan defaults.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

APP_TITLE = "Launchpad"
ENV_DATA_DIR = "LAUNCHPAD_DATA_DIR"

CUSTOM_PATHS_FILE_NAME = "custom_paths.json"
PORTABLE_APPS_FILE_NAME = "portable_apps.json"
SETTINGS_FILE_NAME = "settings.json"
LOGS_DIR_NAME = "logs"
LOG_FILE_NAME = "launchpad.log"

# --- Registry scanner ---
REGISTRY_NAMESPACES = [
    r"HKLM\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall",
    r"HKLM\SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall",
    r"HKCU\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall",
]

# Display names that are patches, not user-facing applications.
UPDATE_NAME_PREFIXES = ("KB",)
UPDATE_NAME_MARKERS = ("Update for", "Security Update", "Hotfix")

# --- Shortcut scanner ---
USER_START_MENU_PARTS = ("Microsoft", "Windows", "Start Menu", "Programs")
SHORTCUT_SUFFIX = ".lnk"

# Shortcuts that open documents or uninstallers rather than the app itself.
NON_LAUNCH_SHORTCUT_PATTERNS = [
    r"uninstall",
    r"\bremove\b",
    r"\bhelp\b",
    r"read\s*me",
    r"website",
    r"home\s*page",
    r"documentation",
    r"\bmanual\b",
    r"release\s*notes",
    r"\blicen[cs]e\b",
    r"卸载",
    r"帮助",
    r"说明",
    r"网站",
    r"官网",
]

EXECUTABLE_SUFFIXES = (".exe",)

# --- Manual registry ---
PORTABLE_ID_PREFIX = "portable_"
PORTABLE_DEFAULT_PUBLISHER = "Portable"

# --- Scan defaults ---
DEFAULT_COMMAND_TIMEOUT = 30.0
DEFAULT_MAX_WORKERS = 6
DEFAULT_LOG_LEVEL = "INFO"
