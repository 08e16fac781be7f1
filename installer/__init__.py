"""
DevOps toolchain installer.

This package provides the declarative installation steps, the step runner
and the interactive menu that dispatches to it.
"""

from installer.models import Action, Step, StepResult, Verification
from installer.registry import StepRegistry

__all__ = ["Action", "Step", "StepResult", "StepRegistry", "Verification"]
