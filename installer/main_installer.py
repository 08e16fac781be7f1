# installer/main_installer.py
# -*- coding: utf-8 -*-
"""
Main entry point for the DevOps toolchain installer.

Loads configuration, opens the log sink, installs the system prerequisites
and then hands control to the interactive menu. The process exit status is
0 when the operator exits and 1 when any step fails.
"""

import logging
import sys
from typing import Callable, Optional

from common.command_utils import get_symbols, log_installer
from common.core_utils import level_from_name, setup_logging, shutdown_logging
from installer.config import SCRIPT_VERSION
from installer.config_loader import load_app_settings
from installer.config_models import AppSettings
from installer.menu import EXIT_STEP_FAILED, run_menu
from installer.step_runner import run_step
from installer.steps import build_default_registry, build_prerequisites_step

logger = logging.getLogger("devops_installer")


def run_installer(
    app_settings: AppSettings,
    input_func: Optional[Callable[[str], str]] = None,
    output_func: Optional[Callable[[str], None]] = None,
) -> int:
    """
    Install the prerequisites, then run the menu until exit or failure.

    Returns:
        The process exit status.
    """
    symbols = get_symbols(app_settings)
    log_installer(
        f"{symbols.get('refresh', '🔄')} DevOps toolchain installer v{SCRIPT_VERSION} starting...",
        "info",
        logger,
        app_settings,
    )

    prerequisites = run_step(
        build_prerequisites_step(app_settings), app_settings, logger
    )
    if not prerequisites.succeeded:
        return EXIT_STEP_FAILED

    registry = build_default_registry(app_settings)
    return run_menu(
        registry,
        app_settings,
        current_logger=logger,
        input_func=input_func,
        output_func=output_func,
    )


def main(config_file_path: Optional[str] = None) -> int:
    app_settings = load_app_settings(config_file_path)
    setup_logging(
        log_level=level_from_name(app_settings.log_level),
        log_file=app_settings.log_file,
        log_to_console=True,
    )
    try:
        return run_installer(app_settings)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
