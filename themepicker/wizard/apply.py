"""Commits themes through the external apply service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, Signal

from themepicker.errors import (
    ErrorCode,
    ThemePickerError,
    classify_exception,
    format_error_for_user,
)

if TYPE_CHECKING:
    from themepicker.themes.models import ThemeBundle
    from themepicker.themes.service import ThemeApplier

logger = logging.getLogger(__name__)


class _PendingOperation:
    """Single-shot completion channel for one apply or remove call."""

    def __init__(self, coordinator: ApplyCoordinator, theme: ThemeBundle, *, removing: bool) -> None:
        self._coordinator = coordinator
        self.theme = theme
        self.removing = removing
        self.settled = False
        self.cancelled = False

    def on_success(self) -> None:
        if self._settle("success"):
            self._coordinator._finish(self, None, ok=True)

    def on_failure(self, cause: BaseException | None = None) -> None:
        if self._settle("failure"):
            self._coordinator._finish(self, cause, ok=False)

    def _settle(self, outcome: str) -> bool:
        if self.cancelled:
            logger.debug("Dropping %s report for cancelled theme %r", outcome, self.theme.theme_id)
            return False
        if self.settled:
            logger.warning(
                "Ignoring repeated %s report for theme %r", outcome, self.theme.theme_id
            )
            return False
        self.settled = True
        return True


class ApplyCoordinator(QObject):
    """Runs at most one apply or remove operation at a time."""

    applied = Signal(object)        # ThemeBundle
    apply_failed = Signal(str)      # user-facing message
    deleted = Signal(object)        # ThemeBundle
    delete_failed = Signal(str)     # user-facing message

    def __init__(self, applier: ThemeApplier, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._applier = applier
        self._pending: _PendingOperation | None = None

    @property
    def is_busy(self) -> bool:
        return self._pending is not None

    def apply(self, theme: ThemeBundle) -> bool:
        """Start applying a theme; returns False if another operation is in flight."""
        return self._start(theme, removing=False)

    def delete(self, theme: ThemeBundle) -> bool:
        """Start removing a custom theme; returns False if busy."""
        return self._start(theme, removing=True)

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancelled = True
            self._pending = None

    def _start(self, theme: ThemeBundle, *, removing: bool) -> bool:
        if self._pending is not None:
            logger.debug("Ignoring request for %r; operation in flight", theme.theme_id)
            return False
        operation = _PendingOperation(self, theme, removing=removing)
        self._pending = operation
        try:
            if removing:
                self._applier.remove_theme(theme, operation)
            else:
                self._applier.apply_theme(theme, operation)
        except Exception as exc:
            operation.on_failure(exc)
        return True

    def _finish(self, operation: _PendingOperation, cause: BaseException | None, *, ok: bool) -> None:
        if self._pending is operation:
            self._pending = None
        theme = operation.theme
        if ok:
            if operation.removing:
                logger.info("Removed custom theme %r", theme.theme_id)
                self.deleted.emit(theme)
            else:
                logger.info("Applied theme %r", theme.theme_id)
                self.applied.emit(theme)
            return

        error = classify_exception(cause, removing=operation.removing)
        action = "removing" if operation.removing else "applying"
        logger.warning(
            "Error %s theme %r: %s",
            action,
            theme.theme_id,
            error,
            exc_info=cause if isinstance(cause, BaseException) else None,
        )
        # Only the operation is shown to the user; the cause stays in the log.
        code = ErrorCode.THEME_REMOVE_FAILED if operation.removing else ErrorCode.THEME_APPLY_FAILED
        message = format_error_for_user(ThemePickerError(code))
        if operation.removing:
            self.delete_failed.emit(message)
        else:
            self.apply_failed.emit(message)
