"""Application settings via QSettings."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QSettings

from themepicker.themes.constants import DEFAULT_CUSTOM_TITLE, DEFAULT_THEME_ID


class AppSettings:
    """Wraps QSettings for persistent theme picker configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("ThemePicker", "ThemePicker")

    # -- applied theme --

    @property
    def applied_theme_id(self) -> str:
        raw = self._qs.value("theme/applied_id", DEFAULT_THEME_ID, type=str)
        value = (raw or "").strip()
        return value or DEFAULT_THEME_ID

    @applied_theme_id.setter
    def applied_theme_id(self, value: str) -> None:
        cleaned = (value or "").strip() or DEFAULT_THEME_ID
        self._qs.setValue("theme/applied_id", cleaned)

    @property
    def applied_theme_packages(self) -> str:
        raw = self._qs.value("theme/applied_packages", "", type=str)
        return (raw or "").strip()

    @applied_theme_packages.setter
    def applied_theme_packages(self, value: str) -> None:
        self._qs.setValue("theme/applied_packages", (value or "").strip())

    # -- custom themes --

    @property
    def custom_theme_title(self) -> str:
        raw = self._qs.value("custom/default_title", DEFAULT_CUSTOM_TITLE, type=str)
        value = (raw or "").strip()
        return value or DEFAULT_CUSTOM_TITLE

    @custom_theme_title.setter
    def custom_theme_title(self, value: str) -> None:
        cleaned = (value or "").strip() or DEFAULT_CUSTOM_TITLE
        self._qs.setValue("custom/default_title", cleaned)

    def sync(self) -> None:
        self._qs.sync()

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def log_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        import os
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themepicker"
