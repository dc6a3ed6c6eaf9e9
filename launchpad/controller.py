#===============================================================================
#  Launchpad_Application_Catalog | controller.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Qt-facing controller: runs scans and status refreshes on the thread pool
#  and publishes each new catalog through signals, so the UI thread never
#  waits on a scan.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from .catalog_service import CatalogService
from .launcher import is_app_running, launch_app, stop_app
from .models import CatalogEntry, PortableRecord

logger = logging.getLogger(__name__)


class _JobSignals(QObject):
    done = Signal(object)


class _Job(QRunnable):
    """Runs one service call on a pool thread and reports its result."""

    def __init__(self, fn: Callable[[], object]):
        super().__init__()
        self.fn = fn
        self.setAutoDelete(False)
        self.signals = _JobSignals()

    def run(self) -> None:
        try:
            result = self.fn()
        except Exception:
            logger.exception("Background job failed")
            result = None
        self.signals.done.emit(result)


class CatalogController(QObject):
    scan_started = Signal()
    scan_finished = Signal(object)
    refresh_finished = Signal(object)
    busy_changed = Signal(bool)

    def __init__(self, service: CatalogService, pool: Optional[QThreadPool] = None, parent=None):
        super().__init__(parent)
        self.service = service
        self.pool = pool or QThreadPool.globalInstance()
        self._catalog: List[CatalogEntry] = []
        self._job: Optional[_Job] = None
        self._retired: Optional[_Job] = None  # pool thread may still be returning from run()
        self._job_kind = ""

    @property
    def catalog(self) -> List[CatalogEntry]:
        return self._catalog

    @property
    def is_busy(self) -> bool:
        return self._job is not None

    def find(self, app_id: str) -> Optional[CatalogEntry]:
        for entry in self._catalog:
            if entry.id == app_id:
                return entry
        return None

    # ----------------------------
    # Requests (no-op while busy)
    # ----------------------------
    def request_scan(self) -> bool:
        if self._job is not None:
            logger.info("Scan requested while %s is running; ignored", self._job_kind)
            return False
        self._start("scan", self.service.scan)
        self.scan_started.emit()
        return True

    def request_refresh(self) -> bool:
        if self._job is not None:
            logger.info("Refresh requested while %s is running; ignored", self._job_kind)
            return False
        if not self._catalog:
            logger.info("Refresh requested before the first scan; ignored")
            return False
        snapshot = list(self._catalog)
        self._start("refresh", lambda: self.service.refresh_running(snapshot))
        return True

    def _start(self, kind: str, fn: Callable[[], object]) -> None:
        job = _Job(fn)
        job.signals.done.connect(self._on_job_done)
        self._job = job
        self._job_kind = kind
        self.busy_changed.emit(True)
        self.pool.start(job)

    def _on_job_done(self, result: object) -> None:
        kind = self._job_kind
        self._retired, self._job = self._job, None
        self._job_kind = ""
        if result is not None:
            self._catalog = list(result)
            if kind == "scan":
                self.scan_finished.emit(self._catalog)
            else:
                self.refresh_finished.emit(self._catalog)
        self.busy_changed.emit(False)

    # ----------------------------
    # Override mutations
    # ----------------------------
    def set_override_path(self, app_id: str, exe_path: str) -> None:
        self.service.set_override_path(app_id, exe_path)

    def register_portable(self, name: str, exe_path: str, publisher: str = "") -> PortableRecord:
        return self.service.register_portable(name, exe_path, publisher)

    def remove_portable(self, app_id: str) -> bool:
        return self.service.remove_portable(app_id)

    # ----------------------------
    # Process actions
    # ----------------------------
    def launch(self, app_id: str) -> None:
        entry = self.find(app_id)
        if entry is None:
            raise KeyError(app_id)
        launch_app(entry)

    def stop(self, app_id: str) -> int:
        entry = self.find(app_id)
        if entry is None:
            raise KeyError(app_id)
        return stop_app(entry)

    def check_running(self, app_id: str) -> bool:
        """Fresh census check for one entry, without touching the catalog."""
        entry = self.find(app_id)
        if entry is None:
            raise KeyError(app_id)
        return is_app_running(entry.path)
