# installer/config.py
# -*- coding: utf-8 -*-
"""
Centralized static constants and definitions for the DevOps toolchain installer.

This module defines truly static values for the installer, such as the
prerequisite package list, logging symbols and fixed paths.

Mutable runtime configuration (tool versions, download URLs, the log file
location) is handled by 'installer/config_models.py' and
'installer/config_loader.py'.
"""

from pathlib import Path

SCRIPT_VERSION: str = "2.0"

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

LOG_FILE_DEFAULT: str = "/var/log/devops_install.log"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

CONFIG_FILE_ENV_VAR: str = "DEVOPS_INSTALLER_CONFIG"
CONFIG_FILE_DEFAULT: str = "config.yaml"

SYMBOLS: dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "package": "📦",
    "gear": "⚙️",
    "wrench": "🔧",
    "refresh": "🔄",
    "menu": "📌",
}

PREREQ_PACKAGES: list[str] = [
    "wget",
    "zip",
]
