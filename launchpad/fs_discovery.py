#===============================================================================
#  Launchpad_Application_Catalog | fs_discovery.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Filesystem discovery of start-menu shortcuts (.lnk) resolved to executables.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import os
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, ContextManager, Iterable, Iterator, List, Optional, Sequence

from .constants import NON_LAUNCH_SHORTCUT_PATTERNS, SHORTCUT_SUFFIX, USER_START_MENU_PARTS
from .models import CandidateRecord, SourceKind
from .paths import is_executable_path

logger = logging.getLogger(__name__)

ShortcutResolver = Callable[[Path], str]
ResolverSession = Callable[[], ContextManager[Optional[ShortcutResolver]]]

_NON_LAUNCH_RE = re.compile("|".join(NON_LAUNCH_SHORTCUT_PATTERNS), re.IGNORECASE)


def default_start_menu_dirs() -> List[Path]:
    """Per-user and all-users start menu program folders (Windows)."""
    dirs: List[Path] = []
    for env_name in ("APPDATA", "ProgramData"):
        base = os.getenv(env_name)
        if base:
            dirs.append(Path(base).joinpath(*USER_START_MENU_PARTS))
    return dirs


def is_non_launch_shortcut(name: str) -> bool:
    """Uninstallers, help files, readmes and website links are not apps."""
    return bool(_NON_LAUNCH_RE.search(name or ""))


def find_shortcuts(roots: Iterable[Path]) -> List[Path]:
    """Collect .lnk files under each root, recursively, in a stable order."""
    found: List[Path] = []
    for root in roots:
        if not root.is_dir():
            continue
        try:
            links = [p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == SHORTCUT_SUFFIX]
        except OSError as e:
            logger.warning("Cannot list shortcuts under %s: %s", root, e)
            continue
        found.extend(sorted(links, key=lambda p: str(p).lower()))
    return found


@contextmanager
def wscript_session() -> Iterator[Optional[ShortcutResolver]]:
    """WScript.Shell resolver, with COM initialized for the calling thread.

    Scans run on fresh pool threads, so every session brackets its own
    CoInitialize/CoUninitialize. Yields None when pywin32 is missing or the
    shell object cannot be created.
    """
    try:
        import pythoncom  # type: ignore[import-not-found]
        import pywintypes  # type: ignore[import-not-found]
        import win32com.client  # type: ignore[import-not-found]
    except ImportError:
        yield None
        return

    pythoncom.CoInitialize()
    try:
        try:
            shell = win32com.client.Dispatch("WScript.Shell")
        except pywintypes.com_error as e:
            logger.warning("WScript.Shell unavailable: %s", e, exc_info=True)
            shell = None

        if shell is None:
            yield None
        else:
            def resolve(link: Path) -> str:
                return str(shell.CreateShortCut(str(link)).TargetPath or "")

            yield resolve
    finally:
        pythoncom.CoUninitialize()


class ShortcutScanner:
    """Resolves start-menu shortcuts to executable targets.

    Each shortcut name produces at most one candidate. Targets that are
    missing on disk or are not executables are skipped.
    """

    def __init__(
        self,
        roots: Optional[Sequence[Path]] = None,
        resolve_target: Optional[ShortcutResolver] = None,
        session_factory: Optional[ResolverSession] = None,
    ) -> None:
        self.roots = list(roots) if roots is not None else default_start_menu_dirs()
        self._resolve_target = resolve_target
        self._session_factory = session_factory or wscript_session

    def produce(self) -> List[CandidateRecord]:
        if self._resolve_target is not None:
            return self._collect(self._resolve_target)
        with self._session_factory() as resolve:
            if resolve is None:
                logger.warning("Shortcut resolver unavailable; shortcut scan skipped")
                return []
            return self._collect(resolve)

    def _collect(self, resolve: ShortcutResolver) -> List[CandidateRecord]:
        records: List[CandidateRecord] = []
        seen = set()
        for link in find_shortcuts(self.roots):
            name = link.stem.strip()
            if not name or is_non_launch_shortcut(name):
                continue
            if name.casefold() in seen:
                continue
            try:
                target = (resolve(link) or "").strip()
            except Exception as e:
                logger.debug("Cannot resolve shortcut %s: %s", link, e)
                continue
            if not is_executable_path(target):
                continue
            seen.add(name.casefold())
            records.append(
                CandidateRecord(
                    display_name=name,
                    executable_path=target,
                    install_location=str(Path(target).parent),
                    source_kind=SourceKind.SHORTCUT,
                )
            )
        logger.info("Shortcut scan found %d launchable shortcuts", len(records))
        return records
