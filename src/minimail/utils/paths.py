"""Centralized path definitions for minimail.

The base directory defaults to ``~/.minimail`` and can be moved with the
``MINIMAIL_HOME`` environment variable.
"""

import os
from pathlib import Path

# Base application directory
MINIMAIL_DIR = Path(os.environ.get("MINIMAIL_HOME", Path.home() / ".minimail"))

# Subdirectories
LOGS_DIR = MINIMAIL_DIR / "logs"

# Specific files
CONFIG_PATH = MINIMAIL_DIR / "config.json"
