"""Option providers for each component kind."""

from __future__ import annotations

from typing import Iterable, Protocol

from themepicker.themes.loader import decode_packages, new_custom_theme_id
from themepicker.themes.models import (
    ComponentKind,
    ThemeBundle,
    ThemeComponentOption,
    ThemeValidationError,
)


class OptionProvider(Protocol):
    """Supplies the ordered options available for one component kind."""

    kind: ComponentKind

    def list_options(self) -> list[ThemeComponentOption]:
        ...

    def parse(self, serialized: str) -> ThemeBundle | None:
        ...


class StaticOptionProvider:
    """Option provider backed by a fixed, ordered list of options."""

    def __init__(self, kind: ComponentKind, options: Iterable[ThemeComponentOption]) -> None:
        self.kind = kind
        self._options: list[ThemeComponentOption] = []
        self._by_package: dict[str, ThemeComponentOption] = {}
        for option in options:
            if option.kind is not kind:
                raise ThemeValidationError(
                    f"{kind.value} provider cannot offer a {option.kind.value} option"
                )
            if option.package in self._by_package:
                raise ThemeValidationError(
                    f"Duplicate {kind.value} option package {option.package!r}"
                )
            self._by_package[option.package] = option
            self._options.append(option)

    def list_options(self) -> list[ThemeComponentOption]:
        return list(self._options)

    def find_option(self, package: str) -> ThemeComponentOption | None:
        return self._by_package.get(package)

    def parse(self, serialized: str) -> ThemeBundle | None:
        """Resolve this provider's kind from a serialized package reference."""
        try:
            packages = decode_packages(serialized)
        except ThemeValidationError:
            return None
        package = packages.get(self.kind)
        if package is None:
            return None
        option = self.find_option(package)
        if option is None:
            return None
        return ThemeBundle(
            theme_id=new_custom_theme_id(),
            title="",
            options={self.kind: option},
            is_custom=True,
        )
