"""Custom theme wizard exports."""

from themepicker.wizard.apply import ApplyCoordinator
from themepicker.wizard.controller import (
    PrimaryAction,
    SessionOutcome,
    SessionResult,
    WizardController,
)
from themepicker.wizard.steps import ComponentStep, OptionSelection, build_steps

__all__ = [
    "ApplyCoordinator",
    "ComponentStep",
    "OptionSelection",
    "PrimaryAction",
    "SessionOutcome",
    "SessionResult",
    "WizardController",
    "build_steps",
]
