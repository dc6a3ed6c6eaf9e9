#===============================================================================
#  Launchpad_Application_Catalog | registry_scan.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Installed-program discovery from the Windows uninstall registry keys.
#  Each namespace is queried with `reg query /s` and its text output parsed
#  into candidate records.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import ntpath
import re
import subprocess
from typing import Callable, Dict, List, Optional, Sequence

from .constants import (
    DEFAULT_COMMAND_TIMEOUT,
    REGISTRY_NAMESPACES,
    UPDATE_NAME_MARKERS,
    UPDATE_NAME_PREFIXES,
)
from .models import CandidateRecord, SourceKind
from .paths import looks_executable

logger = logging.getLogger(__name__)

# (namespace, timeout) -> stdout text
CommandRunner = Callable[[str, float], str]

VALUE_LINE_RE = re.compile(r"^\s*(\w+)\s+(REG_SZ|REG_EXPAND_SZ)\s+(.+?)\s*$")
BLOCK_SPLIT_RE = re.compile(r"\r?\n\s*\r?\n")

WANTED_VALUES = ("DisplayName", "DisplayIcon", "InstallLocation", "Publisher")


def build_reg_query_command(namespace: str) -> str:
    # one string for the shell; a list would escape the inner quotes as \"
    return f'chcp 65001 >nul && reg query "{namespace}" /s'


def run_reg_query(namespace: str, timeout: float) -> str:
    """Dump one uninstall namespace recursively, console switched to UTF-8."""
    p = subprocess.run(
        build_reg_query_command(namespace),
        shell=True,
        capture_output=True,
        timeout=timeout,
    )
    if p.returncode != 0:
        raise RuntimeError(f"reg query failed (rc={p.returncode}) for {namespace}")
    return p.stdout.decode("utf-8", errors="replace")


def is_update_entry(display_name: str) -> bool:
    """Windows updates, hotfixes and security patches are not applications."""
    if display_name.startswith(UPDATE_NAME_PREFIXES):
        return True
    return any(marker in display_name for marker in UPDATE_NAME_MARKERS)


def resolve_display_icon(display_icon: str, install_location: str) -> str:
    """Executable from DisplayIcon (`"C:\\x\\app.exe",0`), else the install folder."""
    exe_path = ""
    if display_icon:
        exe_path = display_icon.split(",")[0].replace('"', "").strip()
    if not looks_executable(exe_path) and install_location:
        exe_path = install_location
    return exe_path


def parse_registry_block(block: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for line in block.splitlines():
        m = VALUE_LINE_RE.match(line)
        if not m:
            continue
        name, kind, value = m.group(1), m.group(2), m.group(3)
        if name not in WANTED_VALUES:
            continue
        if kind == "REG_EXPAND_SZ":
            value = ntpath.expandvars(value)
        values[name] = value.strip()
    return values


def parse_registry_output(text: str) -> List[CandidateRecord]:
    """Turn `reg query /s` output into candidate records, in output order."""
    records: List[CandidateRecord] = []
    for block in BLOCK_SPLIT_RE.split(text or ""):
        values = parse_registry_block(block)
        name = values.get("DisplayName", "").strip()
        if not name or is_update_entry(name):
            continue
        install_location = values.get("InstallLocation", "").strip('"').strip()
        records.append(
            CandidateRecord(
                display_name=name,
                executable_path=resolve_display_icon(values.get("DisplayIcon", ""), install_location),
                install_location=install_location,
                publisher=values.get("Publisher", ""),
                source_kind=SourceKind.REGISTRY,
            )
        )
    return records


class RegistryScanner:
    """Enumerates uninstall entries across the registry namespaces.

    Namespaces are independent; `produce_namespace` is the unit the catalog
    service fans out, `produce` drains them all in order.
    """

    def __init__(
        self,
        namespaces: Optional[Sequence[str]] = None,
        run_command: Optional[CommandRunner] = None,
        timeout: float = DEFAULT_COMMAND_TIMEOUT,
    ) -> None:
        self.namespaces = list(namespaces) if namespaces is not None else list(REGISTRY_NAMESPACES)
        self._run_command = run_command or run_reg_query
        self.timeout = timeout

    def produce_namespace(self, namespace: str) -> List[CandidateRecord]:
        try:
            output = self._run_command(namespace, self.timeout)
        except subprocess.TimeoutExpired:
            logger.warning("Registry query timed out after %ss: %s", self.timeout, namespace)
            return []
        except (OSError, RuntimeError, UnicodeError) as e:
            logger.warning("Registry namespace unavailable: %s (%s)", namespace, e)
            return []
        records = parse_registry_output(output)
        logger.debug("Registry namespace %s yielded %d records", namespace, len(records))
        return records

    def produce(self) -> List[CandidateRecord]:
        records: List[CandidateRecord] = []
        for namespace in self.namespaces:
            records.extend(self.produce_namespace(namespace))
        return records
