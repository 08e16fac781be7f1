# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing shell commands and logging their output.
"""

import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional

# Import AppSettings for type hinting and SYMBOLS_DEFAULT for fallback
from installer.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Return the configured log symbols, or the defaults when settings are absent."""
    return (
        app_settings.symbols
        if app_settings and app_settings.symbols
        else SYMBOLS_DEFAULT
    )


def log_installer(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs an installer status line at the requested level.

    Args:
        message (str): The log message to be recorded.
        level (str): The severity level of the log message. Defaults to "info". Common options
            include "debug", "info", "success", "warning", "error", and "critical".
            "success" is recorded at INFO level.
        current_logger (Optional[logging.Logger]): A logger instance to use for logging. If not provided,
            a module-level logger will be used.
        app_settings (Optional[AppSettings]): Optional application settings that can influence logging behavior.
        exc_info (bool): Indicator to include exception details in the log. By default, this is set to False.

    Returns:
        None
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    else:
        effective_logger.info(message, exc_info=exc_info)


def _get_elevated_command_prefix() -> List[str]:
    """
    Determines the command prefix that ensures elevated privileges when required.

    Returns:
        List[str]: ["sudo"] if the effective user is not root, otherwise an
        empty list.
    """
    return [] if os.geteuid() == 0 else ["sudo"]


def run_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    capture_output: bool = False,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a system command and logs the process details and results, including both
    standard output and error, if captured.

    The exit status is returned to the caller, never raised; deciding whether a
    non-zero status is a failure is left to the step runner.

    Args:
        command (List[str]): The command and its arguments.
        app_settings (Optional[AppSettings]): Application settings providing the
            logging symbols. If not provided, default symbols are used.
        capture_output (bool): Whether to capture standard output and standard error. Defaults to False.
        cmd_input (Optional[str]): Input to be passed to the command's standard input. Defaults to None.
        current_logger (Optional[logging.Logger]): A logger to use for logging details. If not provided,
            a default logger will be used.
        cwd (Optional[str]): The working directory from which to execute the command.

    Returns:
        subprocess.CompletedProcess: The completed process instance.

    Raises:
        FileNotFoundError: Raised if the specified command is not found on the system.
        OSError: Other operating system errors while spawning the command
            (e.g. a missing working directory).
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    command_to_log_str = subprocess.list2cmdline(command)

    log_installer(
        f"{symbols.get('gear', '⚙️')} Executing: {command_to_log_str} {f'(in {cwd})' if cwd else ''}".rstrip(),
        "debug",
        effective_logger,
        app_settings,
    )
    try:
        result = subprocess.run(
            command,
            check=False,
            capture_output=capture_output,
            text=True,
            input=cmd_input,
            cwd=cwd,
        )
    except FileNotFoundError as e:
        log_installer(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        raise
    except OSError as e:
        log_installer(
            f"{symbols.get('error', '❌')} Unexpected error running command `{command_to_log_str}`: {e}",
            "error",
            effective_logger,
            app_settings,
        )
        raise

    if capture_output:
        for stream_name, stream in (("stdout", result.stdout), ("stderr", result.stderr)):
            if stream and stream.strip():
                log_installer(
                    f"   {stream_name}: {stream.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
    return result


def run_elevated_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    capture_output: bool = False,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a command with elevated permissions by prefixing `sudo` when the
    process is not already running as root. Accepts the same options as
    run_command.

    Returns:
        subprocess.CompletedProcess
            The result of the command execution, containing the return code, stdout, and stderr.
    """
    prefix = _get_elevated_command_prefix()
    elevated_command_list = prefix + list(command)
    return run_command(
        elevated_command_list,
        app_settings,
        capture_output=capture_output,
        cmd_input=cmd_input,
        current_logger=current_logger,
        cwd=cwd,
    )


def command_exists(command_name: str) -> bool:
    """
    Check if a command exists in the system's PATH.

    Parameters:
        command_name (str): The name of the command to check for existence.

    Returns:
        bool: True if the command is found in the system's PATH, False otherwise.
    """
    return shutil.which(command_name) is not None
