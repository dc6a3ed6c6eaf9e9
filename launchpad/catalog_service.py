#===============================================================================
#  Launchpad_Application_Catalog | catalog_service.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Full scan pipeline (scanners + census fanned out, joined, reconciled),
#  the light running-state refresh, and the override mutations a catalog
#  consumer needs. Both scan and refresh are single-flight.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Set, TypeVar

from . import state as store
from .census import census
from .fs_discovery import ShortcutScanner, default_start_menu_dirs
from .models import CandidateRecord, CatalogEntry, PortableRecord
from .reconcile import reconcile, refresh_running
from .registry_scan import RegistryScanner
from .state import ManualOverrides, ManualRegistry, Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _drain(future: "Future[T]", label: str, default: T) -> T:
    """Join one fan-out task; a failed source contributes its empty result."""
    try:
        return future.result()
    except Exception:
        logger.exception("Source %s failed; continuing without it", label)
        return default


class CatalogService:
    """Owns the scanners and the override store for one data directory.

    `scan()` and `refresh_running()` return a fresh list each time, or None
    when refused because a conflicting job is already in flight.
    """

    def __init__(
        self,
        data_dir: Path,
        settings: Optional[Settings] = None,
        registry: Optional[RegistryScanner] = None,
        shortcuts: Optional[ShortcutScanner] = None,
        census_fn: Callable[[], Set[str]] = census,
    ) -> None:
        self.data_dir = data_dir
        self.settings = settings or Settings()
        self.registry = registry or RegistryScanner(
            namespaces=self.settings.registry_namespaces,
            timeout=self.settings.command_timeout,
        )
        self.shortcuts = shortcuts or ShortcutScanner(
            roots=default_start_menu_dirs() + [Path(d) for d in self.settings.extra_shortcut_dirs],
        )
        self.manual = ManualRegistry(data_dir)
        self._census = census_fn

        self._gate = threading.Lock()
        self._scanning = False
        self._refreshing = False

    @property
    def is_busy(self) -> bool:
        with self._gate:
            return self._scanning or self._refreshing

    # ----------------------------
    # Full scan
    # ----------------------------
    def scan(self) -> Optional[List[CatalogEntry]]:
        with self._gate:
            if self._scanning:
                logger.info("Scan already in progress; request ignored")
                return None
            self._scanning = True
        try:
            return self._scan()
        finally:
            with self._gate:
                self._scanning = False

    def _scan(self) -> List[CatalogEntry]:
        namespaces = list(self.registry.namespaces)
        workers = max(1, min(self.settings.max_workers, len(namespaces) + 3))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="launchpad-scan") as pool:
            registry_futures = [pool.submit(self.registry.produce_namespace, ns) for ns in namespaces]
            shortcut_future = pool.submit(self.shortcuts.produce)
            manual_future = pool.submit(self.manual.load)
            census_future = pool.submit(self._census)

            registry_records: List[CandidateRecord] = []
            for ns, future in zip(namespaces, registry_futures):
                registry_records.extend(_drain(future, f"registry {ns}", []))
            shortcut_records = _drain(shortcut_future, "shortcuts", [])
            overrides = _drain(manual_future, "manual registry", ManualOverrides())
            running = _drain(census_future, "census", set())

        catalog = reconcile(
            registry_records,
            shortcut_records,
            overrides.custom_paths,
            overrides.portables,
            running,
            collation_locale=self.settings.collation_locale,
        )
        logger.info(
            "Scan complete: %d entries (%d registry, %d shortcut, %d portable candidates)",
            len(catalog),
            len(registry_records),
            len(shortcut_records),
            len(overrides.portables),
        )
        return catalog

    # ----------------------------
    # Light refresh
    # ----------------------------
    def refresh_running(self, catalog: List[CatalogEntry]) -> Optional[List[CatalogEntry]]:
        with self._gate:
            if self._scanning or self._refreshing:
                logger.info("Refresh refused: another job is in progress")
                return None
            self._refreshing = True
        try:
            try:
                running = self._census()
            except Exception:
                logger.exception("Census failed during refresh")
                running = set()
            return refresh_running(catalog, running)
        finally:
            with self._gate:
                self._refreshing = False

    # ----------------------------
    # Override mutations (visible on the next scan)
    # ----------------------------
    def set_override_path(self, app_id: str, exe_path: str) -> None:
        store.save_custom_path(self.data_dir, app_id, exe_path)
        logger.info("Custom path for %s set to %r", app_id, exe_path)

    def register_portable(self, name: str, exe_path: str, publisher: str = "") -> PortableRecord:
        record = store.add_portable_app(self.data_dir, name, exe_path, publisher)
        logger.info("Registered portable app %r as %s", record.name, record.id)
        return record

    def remove_portable(self, app_id: str) -> bool:
        removed = store.remove_portable_app(self.data_dir, app_id)
        if removed:
            logger.info("Removed portable app %s", app_id)
        return removed
