"""Component steps and their interactive selection units."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Protocol

from PySide6.QtCore import QObject, Signal

from themepicker.themes.models import ComponentKind, ThemeComponentOption, ThemeValidationError

if TYPE_CHECKING:
    from themepicker.themes.builder import CustomThemeBuilder
    from themepicker.themes.providers import OptionProvider


class StepUnit(Protocol):
    """Interactive unit shown for a step; reports the chosen option."""

    def selected_option(self) -> ThemeComponentOption | None:
        ...


UnitFactory = Callable[["ComponentStep"], StepUnit]


class OptionSelection(QObject):
    """Selection state for one component step."""

    selection_changed = Signal(object)  # ThemeComponentOption | None

    def __init__(
        self,
        kind: ComponentKind,
        options: Iterable[ThemeComponentOption],
        initial: ThemeComponentOption | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._kind = kind
        self._options = list(options)
        self._selected: ThemeComponentOption | None = None
        if initial is not None and initial in self._options:
            self._selected = initial

    @property
    def kind(self) -> ComponentKind:
        return self._kind

    @property
    def options(self) -> list[ThemeComponentOption]:
        return list(self._options)

    def selected_option(self) -> ThemeComponentOption | None:
        return self._selected

    def select(self, option: ThemeComponentOption) -> None:
        if option.kind is not self._kind:
            raise ThemeValidationError(
                f"Cannot select a {option.kind.value} option on the {self._kind.value} step"
            )
        if option not in self._options:
            raise ThemeValidationError(f"Option {option.package!r} is not offered on this step")
        if option == self._selected:
            return
        self._selected = option
        self.selection_changed.emit(option)

    def clear(self) -> None:
        if self._selected is None:
            return
        self._selected = None
        self.selection_changed.emit(None)


@dataclass
class ComponentStep:
    """One step of the custom theme wizard, bound to a component kind.

    The interactive unit is created on first use and reused for the rest of
    the session, so revisiting a step keeps its selection.
    """

    kind: ComponentKind
    provider: OptionProvider
    title: str
    position: int
    total_steps: int
    unit_factory: UnitFactory
    _unit: StepUnit | None = field(default=None, init=False, repr=False)

    @property
    def has_unit(self) -> bool:
        return self._unit is not None

    @property
    def is_last(self) -> bool:
        return self.position == self.total_steps - 1

    def unit(self) -> StepUnit:
        if self._unit is None:
            self._unit = self.unit_factory(self)
        return self._unit


def selection_unit_factory(builder: CustomThemeBuilder) -> UnitFactory:
    """Create OptionSelection units pre-selected from the builder's choices."""

    def create(step: ComponentStep) -> OptionSelection:
        return OptionSelection(
            step.kind,
            step.provider.list_options(),
            initial=builder.selection_for(step.kind),
        )

    return create


def build_steps(providers: Iterable[OptionProvider], unit_factory: UnitFactory) -> list[ComponentStep]:
    """Build the four component steps in their fixed order."""
    by_kind: dict[ComponentKind, OptionProvider] = {}
    for provider in providers:
        if provider.kind in by_kind:
            raise ThemeValidationError(f"Duplicate provider for {provider.kind.value!r}")
        by_kind[provider.kind] = provider

    missing = [kind.value for kind in ComponentKind if kind not in by_kind]
    if missing:
        raise ThemeValidationError(f"Missing option providers: {', '.join(missing)}")

    total = len(ComponentKind)
    return [
        ComponentStep(
            kind=kind,
            provider=by_kind[kind],
            title=kind.title,
            position=position,
            total_steps=total,
            unit_factory=unit_factory,
        )
        for position, kind in enumerate(ComponentKind)
    ]
