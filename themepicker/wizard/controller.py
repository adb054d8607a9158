"""Step sequencing and finish protocol for the custom theme wizard."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from themepicker.errors import ErrorCode, ThemePickerError
from themepicker.themes.constants import APPLY_LABEL, NEXT_LABEL
from themepicker.themes.models import ComponentKind, ThemeValidationError

if TYPE_CHECKING:
    from themepicker.themes.builder import CustomThemeBuilder
    from themepicker.themes.catalog import ThemeCatalog
    from themepicker.themes.models import ThemeBundle
    from themepicker.themes.providers import OptionProvider
    from themepicker.wizard.apply import ApplyCoordinator
    from themepicker.wizard.steps import ComponentStep

logger = logging.getLogger(__name__)


class SessionOutcome(Enum):
    """How a session ended; values match the picker's result codes."""

    CANCELLED = 0
    DELETED = 10
    APPLIED = 20


class PrimaryAction(Enum):
    NEXT = NEXT_LABEL
    APPLY = APPLY_LABEL

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class SessionResult:
    outcome: SessionOutcome
    theme: ThemeBundle | None = None


class WizardController(QObject):
    """Drives one custom theme session from the first step to apply.

    Steps are visited in order. Completing the last step builds the theme,
    looks for an equivalent cataloged theme to offer instead, and applies
    through the coordinator. The session ends on apply, delete or cancel.
    """

    step_changed = Signal(int, int)             # index, total steps
    redirect_offered = Signal(object, object)   # cataloged candidate, built theme
    apply_failed = Signal(str)
    delete_failed = Signal(str)
    session_finished = Signal(object)           # SessionResult

    def __init__(
        self,
        steps: list[ComponentStep],
        builder: CustomThemeBuilder,
        catalog: ThemeCatalog,
        coordinator: ApplyCoordinator,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        kinds = tuple(step.kind for step in steps)
        if kinds != tuple(ComponentKind):
            raise ThemeValidationError(
                "Steps must cover each component kind once, in order: "
                + ", ".join(kind.value for kind in kinds)
            )
        self._steps = list(steps)
        self._builder = builder
        self._catalog = catalog
        self._coordinator = coordinator
        self._index = 0
        self._history: list[int] = []
        self._started = False
        self._result: SessionResult | None = None
        self._redirect: tuple[ThemeBundle, ThemeBundle] | None = None

        coordinator.applied.connect(self._on_applied)
        coordinator.apply_failed.connect(self._on_apply_failed)
        coordinator.deleted.connect(self._on_deleted)
        coordinator.delete_failed.connect(self._on_delete_failed)

    # -- state --

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_step(self) -> ComponentStep:
        return self._steps[self._index]

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    @property
    def is_last_step(self) -> bool:
        return self._index == len(self._steps) - 1

    @property
    def primary_action(self) -> PrimaryAction:
        return PrimaryAction.APPLY if self.is_last_step else PrimaryAction.NEXT

    @property
    def history(self) -> list[int]:
        return list(self._history)

    @property
    def builder(self) -> CustomThemeBuilder:
        return self._builder

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def is_busy(self) -> bool:
        return self._coordinator.is_busy

    @property
    def is_finished(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> SessionResult | None:
        return self._result

    @property
    def pending_redirect(self) -> ThemeBundle | None:
        return self._redirect[0] if self._redirect is not None else None

    def provider_for(self, position: int) -> OptionProvider:
        return self._steps[position].provider

    # -- navigation --

    def start(self) -> None:
        self._ensure_open()
        if self._started:
            raise ThemePickerError(ErrorCode.SESSION_ALREADY_STARTED)
        self._started = True
        self._index = 0
        self._history = []
        self._activate(0)

    def advance_or_finish(self) -> None:
        self._ensure_active()
        if self._coordinator.is_busy:
            logger.debug("Ignoring advance while an operation is in flight")
            return
        if self._redirect is not None:
            logger.debug("Ignoring advance while a redirect offer is pending")
            return

        step = self.current_step
        option = step.unit().selected_option()
        if option is None:
            raise ThemePickerError(
                ErrorCode.SELECTION_MISSING,
                details={"step": step.kind.value},
            )
        self._builder.record_selection(step.kind, option)

        if not self.is_last_step:
            self._history.append(self._index)
            self._activate(self._index + 1)
            return
        self._finish()

    def go_back(self) -> bool:
        """Return to the previous step; on the first step, end the session.

        Returns True when the wizard moved back, False when the session ended
        or the request was ignored.
        """
        self._ensure_active()
        if self._coordinator.is_busy:
            logger.debug("Ignoring back while an operation is in flight")
            return False
        if self._redirect is not None:
            logger.debug("Withdrawing redirect offer for %r", self._redirect[0].theme_id)
            self._redirect = None
        if not self._history:
            self.cancel()
            return False
        self._activate(self._history.pop())
        return True

    # -- finish protocol --

    def accept_redirect(self) -> None:
        candidate, _built = self._take_redirect()
        if candidate is not None:
            self._coordinator.apply(candidate)

    def decline_redirect(self) -> None:
        _candidate, built = self._take_redirect()
        if built is not None:
            self._coordinator.apply(built)

    def delete(self) -> None:
        self._ensure_active()
        original = self._builder.original
        if original is None:
            raise ThemePickerError(ErrorCode.DELETE_NOT_ALLOWED)
        if self._coordinator.is_busy:
            logger.debug("Ignoring delete while an operation is in flight")
            return
        self._redirect = None
        self._coordinator.delete(original)

    def cancel(self) -> None:
        if self._result is not None:
            return
        self._coordinator.cancel()
        self._redirect = None
        self._end(SessionResult(SessionOutcome.CANCELLED))

    def _finish(self) -> None:
        theme = self._builder.build_complete()
        original = self._builder.original
        if original is not None and original.is_equivalent(theme):
            # Re-applying the theme being edited is never redirected.
            self._coordinator.apply(original)
            return

        candidate = self._catalog.find_equivalent(theme)
        if candidate is None:
            self._coordinator.apply(theme)
            return
        logger.info("Offering %r instead of custom theme %r", candidate.theme_id, theme.title)
        self._redirect = (candidate, theme)
        self.redirect_offered.emit(candidate, theme)

    def _take_redirect(self) -> tuple[ThemeBundle | None, ThemeBundle | None]:
        self._ensure_active()
        if self._coordinator.is_busy:
            logger.debug("Ignoring redirect answer while an operation is in flight")
            return None, None
        if self._redirect is None:
            raise ThemePickerError(ErrorCode.REDIRECT_NOT_PENDING)
        candidate, built = self._redirect
        self._redirect = None
        return candidate, built

    # -- internals --

    def _activate(self, index: int) -> None:
        self._index = index
        self._steps[index].unit()
        self.step_changed.emit(index, len(self._steps))

    def _ensure_open(self) -> None:
        if self._result is not None:
            raise ThemePickerError(ErrorCode.SESSION_FINISHED)

    def _ensure_active(self) -> None:
        self._ensure_open()
        if not self._started:
            raise ThemePickerError(ErrorCode.SESSION_NOT_STARTED)

    def _end(self, result: SessionResult) -> None:
        self._result = result
        logger.info("Custom theme session ended: %s", result.outcome.name.lower())
        self.session_finished.emit(result)

    def _on_applied(self, theme: ThemeBundle) -> None:
        if self._result is None:
            self._end(SessionResult(SessionOutcome.APPLIED, theme))

    def _on_apply_failed(self, message: str) -> None:
        if self._result is None:
            self.apply_failed.emit(message)

    def _on_deleted(self, theme: ThemeBundle) -> None:
        if self._result is None:
            self._end(SessionResult(SessionOutcome.DELETED, theme))

    def _on_delete_failed(self, message: str) -> None:
        if self._result is None:
            self.delete_failed.emit(message)
