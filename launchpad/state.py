#===============================================================================
#  Launchpad_Application_Catalog | state.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Load/save of the durable pieces: settings, custom executable paths and
#  user-registered portable apps. The manual registry reads the last two back
#  for every scan.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
import ntpath
import os
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .constants import (
    APP_TITLE,
    CUSTOM_PATHS_FILE_NAME,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_WORKERS,
    ENV_DATA_DIR,
    PORTABLE_APPS_FILE_NAME,
    PORTABLE_DEFAULT_PUBLISHER,
    PORTABLE_ID_PREFIX,
    REGISTRY_NAMESPACES,
    SETTINGS_FILE_NAME,
)
from .models import CandidateRecord, PortableRecord

logger = logging.getLogger(__name__)


def resolve_data_dir() -> Path:
    """Where settings and overrides live. LAUNCHPAD_DATA_DIR wins."""
    override = os.getenv(ENV_DATA_DIR)
    if override:
        return Path(override)
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA")
    else:
        base = os.getenv("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    if not base:
        base = str(Path.home())
    return Path(base) / APP_TITLE


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable %s: %s", path, e)
        return default


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


# ----------------------------
# Settings
# ----------------------------
@dataclass
class Settings:
    collation_locale: str = ""      # "" -> system locale
    command_timeout: float = DEFAULT_COMMAND_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS
    registry_namespaces: List[str] = field(default_factory=lambda: list(REGISTRY_NAMESPACES))
    extra_shortcut_dirs: List[str] = field(default_factory=list)
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(data_dir: Path) -> Settings:
    """Load settings, keeping defaults for anything missing or malformed."""
    settings = Settings()
    data = _read_json(data_dir / SETTINGS_FILE_NAME, {})
    if not isinstance(data, dict):
        return settings

    locale_name = data.get("collation_locale")
    if isinstance(locale_name, str):
        settings.collation_locale = locale_name.strip()

    timeout = data.get("command_timeout")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        settings.command_timeout = float(timeout)

    workers = data.get("max_workers")
    if isinstance(workers, int) and not isinstance(workers, bool) and workers > 0:
        settings.max_workers = workers

    namespaces = data.get("registry_namespaces")
    if isinstance(namespaces, list):
        cleaned = [ns.strip() for ns in namespaces if isinstance(ns, str) and ns.strip()]
        if cleaned:
            settings.registry_namespaces = cleaned

    extra = data.get("extra_shortcut_dirs")
    if isinstance(extra, list):
        settings.extra_shortcut_dirs = [d.strip() for d in extra if isinstance(d, str) and d.strip()]

    level = data.get("log_level")
    if isinstance(level, str) and level.strip():
        settings.log_level = level.strip().upper()
    return settings


def save_settings(data_dir: Path, settings: Settings) -> None:
    _write_json(data_dir / SETTINGS_FILE_NAME, asdict(settings))


def ensure_settings(data_dir: Path) -> Settings:
    """Load settings, seeding settings.json with the defaults when it is missing."""
    path = data_dir / SETTINGS_FILE_NAME
    settings = load_settings(data_dir)
    if not path.exists():
        try:
            save_settings(data_dir, settings)
        except OSError as e:
            logger.warning("Cannot write default settings to %s: %s", path, e)
    return settings


# ----------------------------
# Custom executable paths
# ----------------------------
def load_custom_paths(data_dir: Path) -> Dict[str, str]:
    data = _read_json(data_dir / CUSTOM_PATHS_FILE_NAME, {})
    if not isinstance(data, dict):
        return {}
    return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str) and v.strip()}


def save_custom_path(data_dir: Path, app_id: str, exe_path: str) -> None:
    """Persist a user-chosen executable for `app_id`; an empty path clears it."""
    paths = load_custom_paths(data_dir)
    exe_path = (exe_path or "").strip()
    if exe_path:
        paths[app_id] = exe_path
    else:
        paths.pop(app_id, None)
    _write_json(data_dir / CUSTOM_PATHS_FILE_NAME, paths)


# ----------------------------
# Portable apps
# ----------------------------
def load_portable_apps(data_dir: Path) -> List[PortableRecord]:
    data = _read_json(data_dir / PORTABLE_APPS_FILE_NAME, [])
    if not isinstance(data, list):
        return []
    records: List[PortableRecord] = []
    seen = set()
    for item in data:
        if not isinstance(item, dict):
            continue
        record = PortableRecord.from_dict(item)
        if not record.id or not record.name or record.id in seen:
            continue
        seen.add(record.id)
        records.append(record)
    return records


def save_portable_apps(data_dir: Path, records: List[PortableRecord]) -> None:
    _write_json(data_dir / PORTABLE_APPS_FILE_NAME, [r.to_dict() for r in records])


def new_portable_id(existing: set) -> str:
    stamp = int(time.time() * 1000)
    while f"{PORTABLE_ID_PREFIX}{stamp}" in existing:
        stamp += 1
    return f"{PORTABLE_ID_PREFIX}{stamp}"


def add_portable_app(data_dir: Path, name: str, exe_path: str, publisher: str = "") -> PortableRecord:
    name = (name or "").strip()
    exe_path = (exe_path or "").strip()
    if not name:
        raise ValueError("Portable app needs a name")
    if not exe_path:
        raise ValueError("Portable app needs an executable path")

    records = load_portable_apps(data_dir)
    record = PortableRecord(
        id=new_portable_id({r.id for r in records}),
        name=name,
        path=exe_path,
        publisher=(publisher or "").strip() or PORTABLE_DEFAULT_PUBLISHER,
        install_location=ntpath.dirname(exe_path),
    )
    records.append(record)
    save_portable_apps(data_dir, records)
    return record


def remove_portable_app(data_dir: Path, app_id: str) -> bool:
    records = load_portable_apps(data_dir)
    kept = [r for r in records if r.id != app_id]
    if len(kept) == len(records):
        return False
    save_portable_apps(data_dir, kept)
    return True


# ----------------------------
# Manual registry
# ----------------------------
@dataclass(frozen=True)
class ManualOverrides:
    custom_paths: Dict[str, str] = field(default_factory=dict)
    portables: List[PortableRecord] = field(default_factory=list)


class ManualRegistry:
    """Straight loader for the user's overrides; no merge logic of its own."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir

    def load(self) -> ManualOverrides:
        return ManualOverrides(
            custom_paths=load_custom_paths(self.data_dir),
            portables=load_portable_apps(self.data_dir),
        )

    def produce(self) -> List[CandidateRecord]:
        return [r.to_candidate() for r in load_portable_apps(self.data_dir)]
