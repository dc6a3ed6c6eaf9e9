#===============================================================================
#  Launchpad_Application_Catalog  |  Installed Application Catalog
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Discovers installed applications and reconciles them into one catalog:
#    - Uninstall registry entries (64-bit, 32-bit and per-user views)
#    - Start-menu shortcuts (per-user and all-users)
#    - User overrides: custom executable paths and portable apps
#  Each entry is stamped with its live running state.
#
#  This entry point runs one scan headless and prints the catalog. A UI
#  drives the same CatalogController and listens to its signals.
#
#  Data Folder
#  -----------
#    $LAUNCHPAD_DATA_DIR (or the per-user app data folder)/
#      - settings.json          -> scan settings
#      - custom_paths.json      -> app id -> user-chosen executable
#      - portable_apps.json     -> user-registered portable apps
#      - logs/launchpad.log
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Permission Notice (Personal/Internal Use)
#  -----------------------------------------
#  You may use, copy, and modify this software for personal or internal use.
#  Redistribution or public release should include this header and credit the
#  author. If you plan to open-source this project, consider replacing this
#  section with an OSI-approved license (e.g., MIT) for clarity.
#
#  Third-Party Components
#  ----------------------
#  This project uses third-party libraries (PySide6, psutil, pywin32) which
#  are licensed separately by their respective authors. Ensure compliance with
#  their license terms when distributing this software.
#===============================================================================

import json
import sys

from PySide6.QtCore import QCoreApplication

from launchpad.catalog_service import CatalogService
from launchpad.constants import LOGS_DIR_NAME
from launchpad.controller import CatalogController
from launchpad.log_setup import configure_logging
from launchpad.state import ensure_settings, resolve_data_dir


def main() -> int:
    app = QCoreApplication(sys.argv)

    data_dir = resolve_data_dir()
    settings = ensure_settings(data_dir)
    configure_logging(data_dir / LOGS_DIR_NAME, settings.log_level)

    controller = CatalogController(CatalogService(data_dir, settings))

    def print_catalog(catalog):
        for entry in catalog:
            print(json.dumps(entry.to_dict(), ensure_ascii=False))

    def on_busy(busy):
        if not busy:
            app.quit()

    controller.scan_finished.connect(print_catalog)
    controller.busy_changed.connect(on_busy)
    controller.request_scan()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
