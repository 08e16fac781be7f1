# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level helpers for systemd services.
"""

import logging
from typing import Optional

from common.command_utils import (
    get_symbols,
    log_installer,
    run_elevated_command,
)
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def service_is_healthy(
    service_name: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Check a systemd unit with `systemctl status <unit> --no-pager`.

    systemctl exits non-zero when the unit is missing, inactive or failed.

    Args:
        service_name: The systemd unit name, e.g. "jenkins" or "grafana-server".
        app_settings: The application settings.
        current_logger: Optional logger instance.

    Returns:
        True if systemctl reports the unit as running, False otherwise
        (including when systemctl itself is unavailable).
    """
    logger_to_use = current_logger if current_logger else module_logger
    try:
        result = run_elevated_command(
            ["systemctl", "status", service_name, "--no-pager"],
            app_settings,
            capture_output=app_settings.log_command_output,
            current_logger=logger_to_use,
        )
    except OSError as e:
        log_installer(
            f"{get_symbols(app_settings).get('warning', '!')} Could not query service '{service_name}': {e}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False
    return result.returncode == 0
