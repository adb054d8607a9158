"""Catalog of known themes and equivalence lookup."""

from __future__ import annotations

import logging
from typing import Iterable

from themepicker.themes.models import ThemeBundle

logger = logging.getLogger(__name__)


class ThemeCatalog:
    """Holds built-in and previously saved custom themes by id."""

    def __init__(self, themes: Iterable[ThemeBundle] = ()) -> None:
        self._themes: dict[str, ThemeBundle] = {}
        for theme in themes:
            self.add(theme)

    def __len__(self) -> int:
        return len(self._themes)

    def __contains__(self, theme_id: object) -> bool:
        return theme_id in self._themes

    def add(self, theme: ThemeBundle) -> None:
        existing = self._themes.get(theme.theme_id)
        if existing is not None and not existing.is_custom:
            logger.info("Replacing built-in theme %r", theme.theme_id)
        self._themes[theme.theme_id] = theme

    def remove(self, theme_id: str) -> ThemeBundle | None:
        return self._themes.pop(theme_id, None)

    def get_theme(self, theme_id: str) -> ThemeBundle | None:
        return self._themes.get(theme_id)

    def list_themes(self) -> list[ThemeBundle]:
        rows = list(self._themes.values())
        return sorted(rows, key=lambda row: (1 if row.is_custom else 0, row.title.lower()))

    def custom_themes(self) -> list[ThemeBundle]:
        return [theme for theme in self.list_themes() if theme.is_custom]

    def find_equivalent(self, theme: ThemeBundle) -> ThemeBundle | None:
        """Return the cataloged theme using the same package for every kind.

        The query theme itself (same id) and incomplete entries never match.
        """
        matches = [
            candidate
            for candidate in self._themes.values()
            if candidate.theme_id != theme.theme_id and candidate.is_equivalent(theme)
        ]
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "Found %d themes equivalent to %r; using %r",
                len(matches),
                theme.title,
                matches[0].theme_id,
            )
        return matches[0]
