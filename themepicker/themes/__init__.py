"""Custom theme framework exports."""

from themepicker.themes.builder import CustomThemeBuilder
from themepicker.themes.catalog import ThemeCatalog
from themepicker.themes.constants import DEFAULT_THEME_ID
from themepicker.themes.models import (
    ComponentKind,
    ThemeBundle,
    ThemeComponentOption,
    ThemeValidationError,
)
from themepicker.themes.providers import OptionProvider, StaticOptionProvider
from themepicker.themes.service import SettingsThemeService, ThemeApplier

__all__ = [
    "DEFAULT_THEME_ID",
    "ComponentKind",
    "CustomThemeBuilder",
    "OptionProvider",
    "SettingsThemeService",
    "StaticOptionProvider",
    "ThemeApplier",
    "ThemeBundle",
    "ThemeCatalog",
    "ThemeComponentOption",
    "ThemeValidationError",
]
