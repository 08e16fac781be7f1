# installer/step_runner.py
# -*- coding: utf-8 -*-
"""
Executes a single installation step and reports its result.

A step's actions run strictly in order. The first checked action that fails
stops the step; later actions never run. Host changes made before the
failure (installed packages, started services) are left in place: steps are
not transactional and nothing is rolled back.
"""

import logging
import subprocess
from typing import Optional

from common.command_utils import (
    command_exists,
    get_symbols,
    log_installer,
    run_command,
    run_elevated_command,
)
from common.system_utils import service_is_healthy
from installer.config_models import AppSettings
from installer.errors import CommandFailure, VerificationFailure
from installer.models import Action, FailureKind, Step, StepResult

module_logger = logging.getLogger(__name__)


def run_action(
    action: Action,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> subprocess.CompletedProcess:
    """
    Run one action and raise CommandFailure if it did not succeed.

    Output is captured when the action needs to inspect stdout, when it feeds
    stdin (so `tee` does not echo file contents to the console), or when
    `log_command_output` is enabled.
    """
    logger_to_use = current_logger if current_logger else module_logger
    capture = bool(
        action.expect_output
        or action.stdin is not None
        or app_settings.log_command_output
    )
    runner = run_elevated_command if action.elevated else run_command
    try:
        result = runner(
            list(action.argv),
            app_settings,
            capture_output=capture,
            cmd_input=action.stdin,
            current_logger=logger_to_use,
            cwd=action.cwd,
        )
    except OSError as e:
        raise CommandFailure(
            f"`{action.display()}` could not be started: {e}",
            command=action.display(),
        ) from e

    if result.returncode != 0:
        raise CommandFailure(
            f"`{action.display()}` exited with status {result.returncode}",
            command=action.display(),
            returncode=result.returncode,
        )
    if action.expect_output and action.expect_output not in (result.stdout or ""):
        raise CommandFailure(
            f"`{action.display()}` output did not contain '{action.expect_output}'",
            command=action.display(),
            returncode=result.returncode,
        )
    return result


def verify_step(
    step: Step,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Check the step's verification targets, raising VerificationFailure on the
    first missing executable or unhealthy service.
    """
    if step.verification is None:
        return

    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    for command_name in step.verification.commands:
        if not command_exists(command_name):
            raise VerificationFailure(
                f"ERROR: {command_name} installation failed!", command_name
            )
        log_installer(
            f"{symbols.get('success', '✅')} {command_name} installed successfully!",
            "success",
            logger_to_use,
            app_settings,
        )

    for service_name in step.verification.services:
        if not service_is_healthy(service_name, app_settings, logger_to_use):
            raise VerificationFailure(
                f"{step.label} failed to start!", service_name
            )


def run_step(
    step: Step,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> StepResult:
    """
    Execute a single installation step.

    Runs each action of the step in order. A checked action that fails stops
    the step immediately and produces a FAILURE result tagged with that
    action. An unchecked action that fails is logged as a warning and the
    step continues. Once all actions succeed the verification (if any) runs;
    a missing executable or unhealthy service is also a FAILURE.

    Args:
        step: The step to execute.
        app_settings: The application settings object.
        current_logger: The logger instance to use.

    Returns:
        A StepResult. Command and verification failures are reported through
        the result, never raised.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    log_installer(
        f"{symbols.get('package', '📦')} Installing {step.label}...",
        "info",
        logger_to_use,
        app_settings,
    )
    for notice in step.notices:
        log_installer(
            f"{symbols.get('warning', '⚠️')} {notice}",
            "warning",
            logger_to_use,
            app_settings,
        )

    for action in step.actions:
        for line in action.status_lines:
            log_installer(line, "info", logger_to_use, app_settings)
        try:
            run_action(action, app_settings, logger_to_use)
        except CommandFailure as e:
            if not action.check:
                log_installer(
                    f"{symbols.get('warning', '⚠️')} Ignoring failure of optional action: {e}",
                    "warning",
                    logger_to_use,
                    app_settings,
                )
                continue
            log_line = f"{symbols.get('error', '❌')} {step.failure_message_for(action)}"
            log_installer(log_line, "error", logger_to_use, app_settings)
            log_installer(
                f"   Error details: {e}", "error", logger_to_use, app_settings
            )
            return StepResult.failure(
                step.identifier,
                reason=str(e),
                kind=FailureKind.COMMAND,
                log_line=log_line,
                failed_action=action,
            )

    try:
        verify_step(step, app_settings, logger_to_use)
    except VerificationFailure as e:
        log_line = f"{symbols.get('error', '❌')} {e}"
        log_installer(log_line, "error", logger_to_use, app_settings)
        return StepResult.failure(
            step.identifier,
            reason=str(e),
            kind=FailureKind.VERIFICATION,
            log_line=log_line,
        )

    log_line = f"{symbols.get('success', '✅')} {step.final_success_message()}"
    log_installer(log_line, "success", logger_to_use, app_settings)
    return StepResult.success(step.identifier, log_line)
