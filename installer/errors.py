# installer/errors.py
# -*- coding: utf-8 -*-
"""
Exception types raised while running installation steps and reading the menu.
"""

from typing import Optional


class InstallerError(Exception):
    """Base class for installer errors."""


class CommandFailure(InstallerError):
    """An external action exited non-zero, was not found, or lacked its expected output."""

    def __init__(self, message: str, command: Optional[str] = None, returncode: Optional[int] = None):
        super().__init__(message)
        self.command = command
        self.returncode = returncode


class VerificationFailure(InstallerError):
    """An expected executable or service is absent after the step's actions ran."""

    def __init__(self, message: str, target: str):
        super().__init__(message)
        self.target = target


class InputError(InstallerError):
    """The operator entered a selection that does not match any menu entry."""

    def __init__(self, selection: str):
        super().__init__(f"Invalid menu selection: {selection!r}")
        self.selection = selection
