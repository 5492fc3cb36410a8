"""Host-wide constants.

The browser launches the host with no user-controlled
arguments or environment, so configuration is fixed here.
"""
from __future__ import annotations

from pathlib import Path

HOST_NAME = "com.ccs.host"
LOGGER_NAME = "ccs-host"
INSTALL_DIR = Path.home() / ".local" / "lib" / "ccs-host"
LOG_FILE = INSTALL_DIR / "debug.log"
MAX_LOG_LINES = 1000
