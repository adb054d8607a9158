"""Tests for the logging bootstrap and session factory."""

from __future__ import annotations

import json
import logging

import pytest

from themepicker.app import configure_logging, create_custom_theme_session
from themepicker.themes.catalog import ThemeCatalog
from themepicker.themes.models import ComponentKind
from themepicker.themes.service import SettingsThemeService
from themepicker.wizard.controller import SessionOutcome


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("themepicker")
    saved = (list(logger.handlers), logger.propagate, logger.level)
    yield logger
    for handler in list(logger.handlers):
        if handler not in saved[0]:
            logger.removeHandler(handler)
            handler.close()
    logger.propagate = saved[1]
    logger.setLevel(saved[2])


def _reference(opts, names: str) -> str:
    return json.dumps({opts[n].kind.category: opts[n].package for n in names.split()})


def test_configure_logging_installs_rotating_file_once(settings, clean_logger) -> None:
    for handler in list(clean_logger.handlers):
        clean_logger.removeHandler(handler)

    logger = configure_logging(settings)
    assert logger is clean_logger
    assert len(logger.handlers) == 1
    assert configure_logging(settings).handlers == logger.handlers

    logger.info("hello")
    logger.handlers[0].flush()
    log_file = settings.log_dir / "themepicker.log"
    assert "hello" in log_file.read_text(encoding="utf-8")


def test_session_in_create_mode(settings, providers, applier) -> None:
    controller = create_custom_theme_session(settings, ThemeCatalog(), applier, providers)
    assert not controller.is_started
    assert not controller.builder.is_editing
    assert controller.total_steps == 4


def test_invalid_seed_falls_back_to_create_mode(settings, providers, applier) -> None:
    controller = create_custom_theme_session(
        settings, ThemeCatalog(), applier, providers,
        seed_packages="{not json", seed_title="Broken",
    )
    assert not controller.builder.is_editing


def test_seed_opens_edit_mode_with_saved_identity(settings, providers, applier, opts, make_theme) -> None:
    saved = make_theme("custom-42", "F1 I1 C1 S1", title="Mine", is_custom=True)
    controller = create_custom_theme_session(
        settings, ThemeCatalog([saved]), applier, providers,
        seed_packages=_reference(opts, "F1 I1 C1 S1"), seed_title="Mine",
    )
    assert controller.builder.original is saved

    controller.start()
    assert controller.current_step.unit().selected_option() == opts["F1"]


def test_end_to_end_with_settings_service(settings, providers, opts, make_theme) -> None:
    saved = make_theme("custom-42", "F1 I1 C1 S1", title="Mine", is_custom=True)
    catalog = ThemeCatalog([make_theme("pixel", "F2 I2 C2 S2", title="Pixel"), saved])
    service = SettingsThemeService(settings, catalog)
    controller = create_custom_theme_session(
        settings, catalog, service, providers,
        seed_packages=_reference(opts, "F1 I1 C1 S1"), seed_title="Mine", seed_theme_id="custom-42",
    )
    controller.start()
    for _ in range(3):
        controller.advance_or_finish()
    controller.current_step.unit().select(opts["S3"])
    controller.advance_or_finish()

    assert controller.result.outcome is SessionOutcome.APPLIED
    assert settings.applied_theme_id == "custom-42"
    updated = catalog.get_theme("custom-42")
    assert updated.option_for(ComponentKind.SHAPE) == opts["S3"]
    assert len(catalog.custom_themes()) == 1


def test_renamed_seed_edits_saved_theme_matched_by_packages(
    settings, providers, opts, make_theme, caplog
) -> None:
    saved = make_theme("custom-saved", "F1 I1 C1 S1", title="Mine", is_custom=True)
    catalog = ThemeCatalog([saved])
    service = SettingsThemeService(settings, catalog)
    with caplog.at_level("WARNING", logger="themepicker.app"):
        controller = create_custom_theme_session(
            settings, catalog, service, providers,
            seed_packages=_reference(opts, "F1 I1 C1 S1"), seed_title="Mine renamed",
        )
    assert controller.builder.original is saved
    assert any("custom-saved" in record.getMessage() for record in caplog.records)

    controller.start()
    controller.delete()
    assert controller.result.outcome is SessionOutcome.DELETED
    assert "custom-saved" not in catalog


def test_exact_title_match_wins_over_package_match(settings, providers, applier, opts, make_theme) -> None:
    first = make_theme("custom-1", "F1 I1 C1 S1", title="Other", is_custom=True)
    second = make_theme("custom-2", "F1 I1 C1 S1", title="Mine", is_custom=True)
    controller = create_custom_theme_session(
        settings, ThemeCatalog([first, second]), applier, providers,
        seed_packages=_reference(opts, "F1 I1 C1 S1"), seed_title="Mine",
    )
    assert controller.builder.original is second
