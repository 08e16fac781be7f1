"""
Registry for installation steps.

This module provides an ordered registry mapping step identifiers to their
declarative Step definitions. Registration order is menu order.
"""

from typing import Dict, List

from installer.models import Step


class StepRegistry:
    """
    Ordered registry of installation steps.

    Steps are registered once at startup and looked up by identifier when the
    operator makes a menu selection.
    """

    def __init__(self) -> None:
        self._registry: Dict[str, Step] = {}

    def register(self, step: Step) -> Step:
        """
        Register a step.

        Args:
            step: The step to register.

        Returns:
            The registered step.

        Raises:
            ValueError: If a step with the same identifier is already registered.
        """
        if step.identifier in self._registry:
            raise ValueError(
                f"Step with identifier '{step.identifier}' already registered"
            )
        self._registry[step.identifier] = step
        return step

    def get(self, identifier: str) -> Step:
        """
        Get a step by identifier.

        Raises:
            KeyError: If no step with the given identifier is registered.
        """
        if identifier not in self._registry:
            raise KeyError(f"No step registered with identifier '{identifier}'")
        return self._registry[identifier]

    def all_steps(self) -> List[Step]:
        """Return all registered steps in registration order."""
        return list(self._registry.values())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._registry

    def __len__(self) -> int:
        return len(self._registry)
