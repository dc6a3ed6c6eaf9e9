#===============================================================================
#  Launchpad_Application_Catalog | reconcile.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Merges registry records, shortcut targets, custom paths and portable apps
#  into one deduplicated catalog and stamps each entry's running state.
#
#  Path quality, lowest to highest:
#    empty or dangling path < existing executable < user override
#  Every merge point applies that order, so re-running a merge never
#  regresses a good path.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import functools
import logging
import re
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set

from PySide6.QtCore import QCollator, QLocale, Qt

from .models import CandidateRecord, CatalogEntry, PortableRecord, derive_app_id
from .paths import exe_basename, is_executable_path

logger = logging.getLogger(__name__)

PathCheck = Callable[[str], bool]

_WHITESPACE_RE = re.compile(r"\s+")


def names_match(a: str, b: str) -> bool:
    """Heuristic name match between a shortcut label and a catalog name.

    Case-insensitive equality, substring containment in either direction, or
    equality once all whitespace is removed. Short names cross-match easily
    ("Go" matches "Google"); callers take the first hit, not the best one.
    """
    left = (a or "").strip().lower()
    right = (b or "").strip().lower()
    if not left or not right:
        return False
    if left == right or left in right or right in left:
        return True
    return _WHITESPACE_RE.sub("", left) == _WHITESPACE_RE.sub("", right)


def find_first_match(name: str, entries: Iterable[CatalogEntry]) -> Optional[CatalogEntry]:
    for entry in entries:
        if names_match(name, entry.name):
            return entry
    return None


def is_running(path: str, running: Set[str]) -> bool:
    if not path:
        return False
    return exe_basename(path) in running


def make_collator(locale_name: str = "") -> QCollator:
    locale = QLocale(locale_name) if locale_name else QLocale.system()
    collator = QCollator(locale)
    collator.setCaseSensitivity(Qt.CaseInsensitive)
    return collator


def sort_entries(entries: Iterable[CatalogEntry], locale_name: str = "") -> List[CatalogEntry]:
    """Order by display name using locale collation; id breaks ties."""
    collator = make_collator(locale_name)

    def compare(a: CatalogEntry, b: CatalogEntry) -> int:
        c = collator.compare(a.name, b.name)
        if c:
            return c
        return (a.id > b.id) - (a.id < b.id)

    return sorted(entries, key=functools.cmp_to_key(compare))


def _seed_registry(
    catalog: Dict[str, CatalogEntry],
    records: Iterable[CandidateRecord],
    is_valid_path: PathCheck,
) -> None:
    for rec in records:
        name = rec.display_name.strip()
        if not name:
            continue
        app_id = derive_app_id(name)
        existing = catalog.get(app_id)
        if existing is None:
            catalog[app_id] = CatalogEntry(
                id=app_id,
                name=name,
                path=rec.executable_path,
                publisher=rec.publisher,
                install_location=rec.install_location,
            )
            continue

        logger.debug("Duplicate registry name %r; merging", name)
        path = existing.path
        if not is_valid_path(path) and is_valid_path(rec.executable_path):
            path = rec.executable_path
        catalog[app_id] = replace(
            existing,
            path=path,
            publisher=existing.publisher or rec.publisher,
            install_location=existing.install_location or rec.install_location,
        )


def _cross_reference_shortcuts(
    catalog: Dict[str, CatalogEntry],
    records: Iterable[CandidateRecord],
    is_valid_path: PathCheck,
) -> None:
    # shortcuts only match registry-seeded entries, never each other
    seeded_ids = list(catalog)
    for rec in records:
        name = rec.display_name.strip()
        if not name:
            continue
        shortcut_valid = is_valid_path(rec.executable_path)
        match = find_first_match(name, (catalog[i] for i in seeded_ids))
        if match is not None:
            if shortcut_valid and not is_valid_path(match.path):
                catalog[match.id] = replace(match, path=rec.executable_path)
            continue
        if not shortcut_valid:
            continue
        app_id = derive_app_id(name)
        if app_id in catalog:
            logger.debug("Duplicate shortcut name %r; keeping the first", name)
            continue
        catalog[app_id] = CatalogEntry(
            id=app_id,
            name=name,
            path=rec.executable_path,
            install_location=rec.install_location,
        )


def _apply_overrides(
    catalog: Dict[str, CatalogEntry],
    custom_paths: Mapping[str, str],
    is_valid_path: PathCheck,
) -> None:
    for app_id, override in custom_paths.items():
        entry = catalog.get(app_id)
        if entry is None:
            continue
        if not is_valid_path(override):
            logger.info("Custom path for %r does not exist; keeping it: %s", entry.name, override)
        catalog[app_id] = replace(entry, path=override)


def _merge_portables(catalog: Dict[str, CatalogEntry], portables: Iterable[PortableRecord]) -> None:
    for record in portables:
        if not record.id or record.id in catalog:
            continue
        catalog[record.id] = record.to_entry()


def stamp_running(entries: Iterable[CatalogEntry], running: Set[str]) -> List[CatalogEntry]:
    return [replace(e, is_running=is_running(e.path, running)) for e in entries]


def reconcile(
    registry_records: Iterable[CandidateRecord],
    shortcut_records: Iterable[CandidateRecord],
    custom_paths: Mapping[str, str],
    portable_records: Iterable[PortableRecord],
    running: Set[str],
    *,
    is_valid_path: PathCheck = is_executable_path,
    collation_locale: str = "",
) -> List[CatalogEntry]:
    """Build the catalog from one scan's worth of inputs.

    Steps, in order: seed from registry records (first name wins, later
    duplicates only upgrade an invalid path or fill blanks), cross-reference
    shortcuts (first matching registry entry wins, unmatched valid shortcuts
    become entries), force custom paths, append portable apps whose id is new,
    stamp running state, sort.

    Pure with respect to its inputs: the same inputs produce the same list.
    """
    catalog: Dict[str, CatalogEntry] = {}
    _seed_registry(catalog, registry_records, is_valid_path)
    _cross_reference_shortcuts(catalog, shortcut_records, is_valid_path)
    _apply_overrides(catalog, custom_paths, is_valid_path)
    _merge_portables(catalog, portable_records)
    entries = stamp_running(catalog.values(), running)
    return sort_entries(entries, collation_locale)


def refresh_running(catalog: Iterable[CatalogEntry], running: Set[str]) -> List[CatalogEntry]:
    """Recompute only `is_running`; order and every other field are kept."""
    return stamp_running(catalog, running)
