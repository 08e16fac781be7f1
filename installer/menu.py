# installer/menu.py
# -*- coding: utf-8 -*-
"""
Interactive numbered menu that dispatches selections to the step runner.
"""

import logging
from typing import Callable, List, Optional, Tuple

from common.command_utils import get_symbols, log_installer
from installer.config_models import AppSettings
from installer.errors import InputError
from installer.models import Step, StepResult
from installer.registry import StepRegistry
from installer.step_runner import run_step

module_logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STEP_FAILED = 1

EXIT_KEYWORD = "exit"
PROMPT = "Enter your choice: "

StepRunnerFn = Callable[[Step, AppSettings, Optional[logging.Logger]], StepResult]


def menu_entries(registry: StepRegistry) -> List[Tuple[str, str]]:
    """Return (number, label) pairs for every step followed by the Exit entry."""
    entries = [
        (str(index), step.menu_label)
        for index, step in enumerate(registry.all_steps(), start=1)
    ]
    entries.append((str(len(entries) + 1), "Exit"))
    return entries


def render_menu(registry: StepRegistry, app_settings: AppSettings) -> str:
    symbols = get_symbols(app_settings)
    lines = [f"\n{symbols.get('menu', '📌')} Select an option:"]
    lines.extend(f"{number}) {label}" for number, label in menu_entries(registry))
    return "\n".join(lines)


def parse_selection(selection: str, registry: StepRegistry) -> Optional[Step]:
    """
    Map the operator's input to a step.

    Accepts a menu number, a step identifier (case-insensitive) or "exit".

    Returns:
        The selected Step, or None when the operator asked to exit.

    Raises:
        InputError: If the input matches no menu entry.
    """
    choice = selection.strip().lower()
    steps = registry.all_steps()
    exit_number = str(len(steps) + 1)

    if choice in (exit_number, EXIT_KEYWORD):
        return None
    if choice.isdigit() and 1 <= int(choice) <= len(steps):
        return steps[int(choice) - 1]
    if choice in registry:
        return registry.get(choice)
    raise InputError(selection)


def run_menu(
    registry: StepRegistry,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    input_func: Optional[Callable[[str], str]] = None,
    output_func: Optional[Callable[[str], None]] = None,
    step_runner: StepRunnerFn = run_step,
) -> int:
    """
    Show the menu, dispatch one selection per iteration, and loop.

    The loop ends when the operator selects Exit (status 0) or a step fails
    (status 1). Invalid input is logged and the menu is shown again. End of
    input or Ctrl-C at the prompt is treated as Exit.

    Args:
        registry: The registered steps, in menu order.
        app_settings: The application settings object.
        current_logger: The logger instance to use.
        input_func: Reads one line from the operator. Defaults to input().
        output_func: Writes the menu text. Defaults to print().
        step_runner: Executes the selected step.

    Returns:
        The process exit status.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    read_line = input_func if input_func else input
    write = output_func if output_func else print

    while True:
        write(render_menu(registry, app_settings))
        try:
            selection = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            log_installer(
                f"{symbols.get('warning', '⚠️')} No user input, exiting.",
                "warning",
                logger_to_use,
                app_settings,
            )
            return EXIT_OK

        try:
            step = parse_selection(selection, registry)
        except InputError:
            log_installer(
                f"{symbols.get('error', '❌')} Invalid choice! Please select a valid option.",
                "warning",
                logger_to_use,
                app_settings,
            )
            continue

        if step is None:
            log_installer("Exiting...", "info", logger_to_use, app_settings)
            return EXIT_OK

        result = step_runner(step, app_settings, logger_to_use)
        if not result.succeeded:
            return EXIT_STEP_FAILED
