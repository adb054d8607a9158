"""Theme apply and removal service backed by AppSettings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from PySide6.QtCore import QObject, Signal

from themepicker.errors import ErrorCode, ThemePickerError
from themepicker.themes.catalog import ThemeCatalog
from themepicker.themes.constants import DEFAULT_THEME_ID
from themepicker.themes.loader import encode_packages
from themepicker.themes.models import ThemeBundle

if TYPE_CHECKING:
    from themepicker.config.settings import AppSettings


class ApplyCallback(Protocol):
    """Completion channel handed to a theme applier; report exactly once."""

    def on_success(self) -> None:
        ...

    def on_failure(self, cause: BaseException | None = None) -> None:
        ...


class ThemeApplier(Protocol):
    """External service committing or removing themes."""

    def apply_theme(self, theme: ThemeBundle, callback: ApplyCallback) -> None:
        ...

    def remove_theme(self, theme: ThemeBundle, callback: ApplyCallback) -> None:
        ...


class SettingsThemeService(QObject):
    """Apply themes by persisting the selection and keep custom themes cataloged."""

    theme_changed = Signal(str)

    def __init__(self, settings: AppSettings, catalog: ThemeCatalog) -> None:
        super().__init__()
        self._settings = settings
        self._catalog = catalog

    @property
    def applied_theme_id(self) -> str:
        return self._settings.applied_theme_id

    def apply_theme(self, theme: ThemeBundle, callback: ApplyCallback) -> None:
        if not theme.is_complete:
            callback.on_failure(ThemePickerError(
                ErrorCode.THEME_APPLY_FAILED,
                details={"theme_id": theme.theme_id, "reason": "incomplete theme"},
            ))
            return
        try:
            packages = encode_packages(theme)
            self._settings.applied_theme_id = theme.theme_id
            self._settings.applied_theme_packages = packages
            self._settings.sync()
        except Exception as exc:  # pragma: no cover - settings backend failure
            callback.on_failure(exc)
            return
        if theme.is_custom:
            self._catalog.add(theme)
        self.theme_changed.emit(theme.theme_id)
        callback.on_success()

    def remove_theme(self, theme: ThemeBundle, callback: ApplyCallback) -> None:
        if not theme.is_custom:
            callback.on_failure(ThemePickerError(
                ErrorCode.THEME_REMOVE_FAILED,
                details={"theme_id": theme.theme_id, "reason": "not a custom theme"},
            ))
            return
        if self._catalog.remove(theme.theme_id) is None:
            callback.on_failure(ThemePickerError(
                ErrorCode.THEME_REMOVE_FAILED,
                details={"theme_id": theme.theme_id, "reason": "not in catalog"},
            ))
            return
        if self._settings.applied_theme_id == theme.theme_id:
            self._settings.applied_theme_id = DEFAULT_THEME_ID
            self._settings.applied_theme_packages = ""
            self._settings.sync()
            self.theme_changed.emit(DEFAULT_THEME_ID)
        callback.on_success()
