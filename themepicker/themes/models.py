"""Custom theme framework models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from themepicker.themes.constants import OVERLAY_CATEGORIES, STEP_TITLES


class ThemeValidationError(ValueError):
    """Raised when a theme, option or package reference fails validation."""


class ComponentKind(Enum):
    """Selectable component kinds, declared in step order."""

    FONT = "font"
    ICON = "icon"
    COLOR = "color"
    SHAPE = "shape"

    @property
    def category(self) -> str:
        return OVERLAY_CATEGORIES[self.value]

    @property
    def title(self) -> str:
        return STEP_TITLES[self.value]

    @classmethod
    def from_category(cls, category: str) -> ComponentKind:
        for kind in cls:
            if kind.category == category:
                return kind
        raise ThemeValidationError(f"Unknown overlay category: {category!r}")


@dataclass(frozen=True, slots=True)
class ThemeComponentOption:
    """One selectable choice for a component kind.

    Two options are equal when kind and package match; title and preview are
    display metadata only.
    """

    kind: ComponentKind
    package: str
    title: str = field(default="", compare=False)
    preview: Mapping[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ComponentKind):
            raise ThemeValidationError(f"Option kind must be a ComponentKind, got {self.kind!r}")
        if not isinstance(self.package, str) or not self.package.strip():
            raise ThemeValidationError("Option package must be a non-empty string")
        object.__setattr__(self, "preview", MappingProxyType(dict(self.preview)))


@dataclass(frozen=True, slots=True)
class ThemeBundle:
    """A theme assembled from at most one option per component kind.

    A bundle holding all four kinds is complete; anything less is partial.
    ``origin`` points at the theme this one was edited from, if any.
    """

    theme_id: str
    title: str
    options: Mapping[ComponentKind, ThemeComponentOption] = field(default_factory=dict)
    is_custom: bool = False
    origin: ThemeBundle | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.theme_id, str) or not self.theme_id.strip():
            raise ThemeValidationError("Theme id must be a non-empty string")
        cleaned: dict[ComponentKind, ThemeComponentOption] = {}
        for kind, option in self.options.items():
            if not isinstance(kind, ComponentKind):
                raise ThemeValidationError(f"{self.theme_id}: unknown component kind {kind!r}")
            if not isinstance(option, ThemeComponentOption) or option.kind is not kind:
                raise ThemeValidationError(
                    f"{self.theme_id}: option for {kind.value!r} has mismatched kind"
                )
            cleaned[kind] = option
        ordered = {kind: cleaned[kind] for kind in ComponentKind if kind in cleaned}
        object.__setattr__(self, "options", MappingProxyType(ordered))

    def option_for(self, kind: ComponentKind) -> ThemeComponentOption | None:
        return self.options.get(kind)

    @property
    def is_complete(self) -> bool:
        return len(self.options) == len(ComponentKind)

    @property
    def missing_kinds(self) -> tuple[ComponentKind, ...]:
        return tuple(kind for kind in ComponentKind if kind not in self.options)

    def __hash__(self) -> int:
        return hash((self.theme_id, self.package_signature()))

    def package_signature(self) -> tuple[str | None, ...]:
        """Package per kind in step order, None where a kind is missing."""
        return tuple(
            option.package if option is not None else None
            for option in (self.options.get(kind) for kind in ComponentKind)
        )

    def packages(self) -> dict[str, str]:
        return {kind.category: option.package for kind, option in self.options.items()}

    def is_equivalent(self, other: ThemeBundle | None) -> bool:
        """True when both themes are complete and use the same package per kind.

        Title, id and origin are ignored.
        """
        if other is None or not self.is_complete or not other.is_complete:
            return False
        return self.package_signature() == other.package_signature()
