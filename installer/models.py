# installer/models.py
# -*- coding: utf-8 -*-
"""
Pydantic models describing installation steps and their results.

A Step is a declarative, immutable description of one tool's installation:
an ordered tuple of Actions plus an optional Verification. Running a Step
produces exactly one StepResult.
"""

import subprocess
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Action(BaseModel):
    """One external command invocation within a step."""
    model_config = ConfigDict(frozen=True)

    argv: Tuple[str, ...] = Field(min_length=1, description="Command and arguments.")
    elevated: bool = Field(default=False, description="Prefix with sudo unless already root.")
    cwd: Optional[str] = Field(default=None, description="Working directory for the command.")
    stdin: Optional[str] = Field(default=None, description="Text piped to the command's standard input.")
    check: bool = Field(default=True, description="A failing unchecked action only logs a warning.")
    expect_output: Optional[str] = Field(
        default=None, description="Substring that must appear in stdout for the action to succeed."
    )
    failure_message: Optional[str] = Field(
        default=None, description="Overrides the step's failure message for this action."
    )
    status_lines: Tuple[str, ...] = Field(
        default=(), description="Progress lines logged just before the command runs."
    )

    def display(self) -> str:
        """Render the action as a shell-like command line for log messages."""
        rendered = subprocess.list2cmdline(list(self.argv))
        return f"sudo {rendered}" if self.elevated else rendered


class Verification(BaseModel):
    """Post-install checks: executables on PATH and healthy systemd units."""
    model_config = ConfigDict(frozen=True)

    commands: Tuple[str, ...] = ()
    services: Tuple[str, ...] = ()


class Step(BaseModel):
    """One installable tool's ordered action sequence."""
    model_config = ConfigDict(frozen=True)

    identifier: str = Field(min_length=1)
    label: str = Field(min_length=1)
    actions: Tuple[Action, ...] = ()
    verification: Optional[Verification] = None
    failure_message: Optional[str] = None
    success_message: Optional[str] = None
    notices: Tuple[str, ...] = Field(default=(), description="Operator warnings logged before the actions.")

    @property
    def menu_label(self) -> str:
        return f"Install {self.label}"

    def failure_message_for(self, action: Action) -> str:
        if action.failure_message:
            return action.failure_message
        if self.failure_message:
            return self.failure_message
        return f"{self.label} installation failed!"

    def final_success_message(self) -> str:
        return self.success_message or f"{self.label} installation completed."


class StepOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class FailureKind(str, Enum):
    COMMAND = "command"
    VERIFICATION = "verification"


class StepResult(BaseModel):
    """The outcome of running one Step."""
    model_config = ConfigDict(frozen=True)

    step_id: str
    outcome: StepOutcome
    reason: Optional[str] = None
    failure_kind: Optional[FailureKind] = None
    failed_action: Optional[Action] = None
    timestamp: datetime = Field(default_factory=datetime.now)
    log_line: str = ""

    @property
    def succeeded(self) -> bool:
        return self.outcome is StepOutcome.SUCCESS

    @classmethod
    def success(cls, step_id: str, log_line: str) -> "StepResult":
        return cls(step_id=step_id, outcome=StepOutcome.SUCCESS, log_line=log_line)

    @classmethod
    def failure(
        cls,
        step_id: str,
        reason: str,
        kind: FailureKind,
        log_line: str,
        failed_action: Optional[Action] = None,
    ) -> "StepResult":
        return cls(
            step_id=step_id,
            outcome=StepOutcome.FAILURE,
            reason=reason,
            failure_kind=kind,
            failed_action=failed_action,
            log_line=log_line,
        )
