"""Shared fixtures for theme picker tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from themepicker.config.settings import AppSettings
from themepicker.themes.builder import CustomThemeBuilder
from themepicker.themes.catalog import ThemeCatalog
from themepicker.themes.models import ComponentKind, ThemeBundle, ThemeComponentOption
from themepicker.themes.providers import StaticOptionProvider
from themepicker.wizard.apply import ApplyCoordinator
from themepicker.wizard.controller import WizardController
from themepicker.wizard.steps import build_steps, selection_unit_factory

_KIND_PREFIX = {
    ComponentKind.FONT: "F",
    ComponentKind.ICON: "I",
    ComponentKind.COLOR: "C",
    ComponentKind.SHAPE: "S",
}


class FakeApplier:
    """Records apply/remove calls; completes them immediately unless manual."""

    def __init__(self, *, manual: bool = False) -> None:
        self.manual = manual
        self.fail = False
        self.cause: BaseException | None = None
        self.applied: list[ThemeBundle] = []
        self.removed: list[ThemeBundle] = []
        self.callbacks: list = []

    def apply_theme(self, theme, callback) -> None:
        self.applied.append(theme)
        self._respond(callback)

    def remove_theme(self, theme, callback) -> None:
        self.removed.append(theme)
        self._respond(callback)

    def _respond(self, callback) -> None:
        self.callbacks.append(callback)
        if self.manual:
            return
        if self.fail:
            callback.on_failure(self.cause)
        else:
            callback.on_success()


@pytest.fixture
def opts() -> dict[str, ThemeComponentOption]:
    """Options named F1, F2, I1, ... S2 with packages like 'com.test.font.f1'."""
    options: dict[str, ThemeComponentOption] = {}
    for kind, prefix in _KIND_PREFIX.items():
        for number in (1, 2, 3):
            name = f"{prefix}{number}"
            options[name] = ThemeComponentOption(
                kind=kind,
                package=f"com.test.{kind.value}.{name.lower()}",
                title=f"{kind.title} {number}",
            )
    return options


@pytest.fixture
def providers(opts) -> list[StaticOptionProvider]:
    return [
        StaticOptionProvider(kind, [option for option in opts.values() if option.kind is kind])
        for kind in ComponentKind
    ]


@pytest.fixture
def make_theme(opts):
    def make(theme_id: str, names: str, *, title: str | None = None, is_custom: bool = False) -> ThemeBundle:
        options = {opts[name].kind: opts[name] for name in names.split()}
        return ThemeBundle(
            theme_id=theme_id,
            title=title or theme_id,
            options=options,
            is_custom=is_custom,
        )

    return make


@pytest.fixture
def applier() -> FakeApplier:
    return FakeApplier()


@pytest.fixture
def manual_applier() -> FakeApplier:
    return FakeApplier(manual=True)


@pytest.fixture
def settings(tmp_path: Path, monkeypatch) -> AppSettings:
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    qsettings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return AppSettings(qsettings)


@pytest.fixture
def make_controller(providers):
    def make(applier, catalog: ThemeCatalog | None = None, original: ThemeBundle | None = None) -> WizardController:
        builder = CustomThemeBuilder(original)
        steps = build_steps(providers, selection_unit_factory(builder))
        coordinator = ApplyCoordinator(applier)
        return WizardController(steps, builder, catalog or ThemeCatalog(), coordinator)

    return make


@pytest.fixture
def choose():
    """Select an option on the active step of a controller."""
    def select(controller: WizardController, option: ThemeComponentOption) -> None:
        controller.current_step.unit().select(option)

    return select
