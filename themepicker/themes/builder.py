"""Accumulates component selections into a custom theme."""

from __future__ import annotations

from themepicker.errors import IncompleteSelectionError
from themepicker.themes.constants import DEFAULT_CUSTOM_TITLE
from themepicker.themes.loader import new_custom_theme_id
from themepicker.themes.models import (
    ComponentKind,
    ThemeBundle,
    ThemeComponentOption,
    ThemeValidationError,
)


class CustomThemeBuilder:
    """Collects one option per component kind for a single session.

    When started from an existing custom theme (edit mode) every kind is
    pre-populated from it and built themes keep its id and title.
    """

    def __init__(
        self,
        original: ThemeBundle | None = None,
        *,
        title: str = DEFAULT_CUSTOM_TITLE,
        theme_id: str | None = None,
    ) -> None:
        if original is not None and not original.is_complete:
            raise ThemeValidationError(
                f"{original.theme_id}: cannot edit a theme with missing components"
            )
        self._original = original
        self._selections: dict[ComponentKind, ThemeComponentOption] = {}
        if original is not None:
            self._selections.update(original.options)
            self._title = original.title
            self._theme_id = original.theme_id
        else:
            self._title = title
            self._theme_id = theme_id or new_custom_theme_id()

    @property
    def original(self) -> ThemeBundle | None:
        return self._original

    @property
    def is_editing(self) -> bool:
        return self._original is not None

    def selection_for(self, kind: ComponentKind) -> ThemeComponentOption | None:
        return self._selections.get(kind)

    def record_selection(self, kind: ComponentKind, option: ThemeComponentOption) -> None:
        if option.kind is not kind:
            raise ThemeValidationError(
                f"Cannot record a {option.kind.value} option as the {kind.value} selection"
            )
        self._selections[kind] = option

    def build_partial(self) -> ThemeBundle:
        return ThemeBundle(
            theme_id=self._theme_id,
            title=self._title,
            options=dict(self._selections),
            is_custom=True,
            origin=self._original,
        )

    def build_complete(self) -> ThemeBundle:
        theme = self.build_partial()
        if not theme.is_complete:
            raise IncompleteSelectionError(
                missing=tuple(kind.value for kind in theme.missing_kinds)
            )
        return theme
