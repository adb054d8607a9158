"""Logging bootstrap and custom theme session factory."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import Iterable

from themepicker.config.settings import AppSettings
from themepicker.errors import ErrorCode, ThemePickerError
from themepicker.themes.builder import CustomThemeBuilder
from themepicker.themes.catalog import ThemeCatalog
from themepicker.themes.loader import load_seed_theme
from themepicker.themes.models import ThemeBundle
from themepicker.themes.providers import OptionProvider
from themepicker.themes.service import ThemeApplier
from themepicker.wizard.apply import ApplyCoordinator
from themepicker.wizard.controller import WizardController
from themepicker.wizard.steps import UnitFactory, build_steps, selection_unit_factory


def configure_logging(settings: AppSettings) -> logging.Logger:
    logger = logging.getLogger("themepicker")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    handler = RotatingFileHandler(
        settings.log_dir / "themepicker.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def create_custom_theme_session(
    settings: AppSettings,
    catalog: ThemeCatalog,
    applier: ThemeApplier,
    providers: Iterable[OptionProvider],
    *,
    seed_packages: str | None = None,
    seed_title: str | None = None,
    seed_theme_id: str | None = None,
    unit_factory: UnitFactory | None = None,
) -> WizardController:
    """Wire a new, unstarted wizard session.

    A seed that resolves to a complete theme opens the session in edit mode;
    anything else starts a new custom theme.
    """
    logger = logging.getLogger(__name__)
    providers = list(providers)
    original = load_seed_theme(
        seed_packages,
        seed_title,
        providers,
        theme_id=seed_theme_id,
        default_title=settings.custom_theme_title,
    )
    if seed_packages and original is None:
        logger.warning("%s", ThemePickerError(ErrorCode.SEED_INVALID, details={"title": seed_title}))
    elif original is not None and seed_theme_id is None:
        saved = _find_saved_custom_theme(catalog, original)
        if saved is not None:
            original = saved

    builder = CustomThemeBuilder(original, title=settings.custom_theme_title)
    steps = build_steps(providers, unit_factory or selection_unit_factory(builder))
    coordinator = ApplyCoordinator(applier)
    controller = WizardController(steps, builder, catalog, coordinator)
    coordinator.setParent(controller)
    logger.info(
        "Opened custom theme session mode=%s theme_id=%s",
        "edit" if builder.is_editing else "create",
        builder.build_partial().theme_id,
    )
    return controller


def _find_saved_custom_theme(catalog: ThemeCatalog, seed: ThemeBundle) -> ThemeBundle | None:
    matches = [theme for theme in catalog.custom_themes() if theme.is_equivalent(seed)]
    for theme in matches:
        if theme.title == seed.title:
            return theme
    if matches:
        logging.getLogger(__name__).warning(
            "Seed title %r does not match saved theme %r; editing it by packages",
            seed.title,
            matches[0].theme_id,
        )
        return matches[0]
    return None
