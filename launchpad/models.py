#===============================================================================
#  Launchpad_Application_Catalog | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Shared data models: raw scanner observations, merged catalog entries and
#  user-registered portable apps.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import base64
import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict

from .paths import is_executable_path

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


class SourceKind(str, Enum):
    REGISTRY = "registry"
    SHORTCUT = "shortcut"
    MANUAL = "manual"


def derive_app_id(display_name: str) -> str:
    """Stable id for scan-derived apps: base64 of the UTF-8 name, alphanumerics only.

    Override files written by earlier versions are keyed by this exact format.
    """
    encoded = base64.b64encode(display_name.encode("utf-8")).decode("ascii")
    return _NON_ALNUM_RE.sub("", encoded)


@dataclass(frozen=True)
class CandidateRecord:
    """One observation of an app from a single source, before merging."""
    display_name: str
    executable_path: str = ""
    install_location: str = ""
    publisher: str = ""
    source_kind: SourceKind = SourceKind.REGISTRY


@dataclass(frozen=True)
class CatalogEntry:
    """Deduplicated app as shown to the catalog consumer."""
    id: str
    name: str
    path: str = ""
    publisher: str = ""
    install_location: str = ""
    is_portable: bool = False
    is_running: bool = False

    @property
    def has_valid_path(self) -> bool:
        return is_executable_path(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PortableRecord:
    """A user-registered app that no scanner knows about."""
    id: str
    name: str
    path: str = ""
    publisher: str = ""
    install_location: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "PortableRecord":
        return PortableRecord(
            id=str(d.get("id") or "").strip(),
            name=str(d.get("name") or "").strip(),
            path=str(d.get("path") or "").strip(),
            publisher=str(d.get("publisher") or "").strip(),
            install_location=str(d.get("install_location") or d.get("installLocation") or "").strip(),
        )

    def to_candidate(self) -> CandidateRecord:
        return CandidateRecord(
            display_name=self.name,
            executable_path=self.path,
            install_location=self.install_location,
            publisher=self.publisher,
            source_kind=SourceKind.MANUAL,
        )

    def to_entry(self) -> CatalogEntry:
        return CatalogEntry(
            id=self.id,
            name=self.name,
            path=self.path,
            publisher=self.publisher,
            install_location=self.install_location,
            is_portable=True,
        )
