"""Tests for component steps and option selection units."""

from __future__ import annotations

import pytest

from themepicker.themes.builder import CustomThemeBuilder
from themepicker.themes.models import ComponentKind, ThemeValidationError
from themepicker.wizard.steps import OptionSelection, build_steps, selection_unit_factory


def test_build_steps_fixed_order(providers) -> None:
    builder = CustomThemeBuilder()
    steps = build_steps(reversed(providers), selection_unit_factory(builder))

    assert [step.kind for step in steps] == list(ComponentKind)
    assert [step.position for step in steps] == [0, 1, 2, 3]
    assert [step.title for step in steps] == ["Font", "Icon", "Color", "Shape"]
    assert all(step.total_steps == 4 for step in steps)
    assert [step.is_last for step in steps] == [False, False, False, True]


def test_build_steps_requires_every_kind(providers) -> None:
    with pytest.raises(ThemeValidationError):
        build_steps(providers[:3], selection_unit_factory(CustomThemeBuilder()))


def test_build_steps_rejects_duplicate_kind(providers) -> None:
    with pytest.raises(ThemeValidationError):
        build_steps([*providers, providers[0]], selection_unit_factory(CustomThemeBuilder()))


def test_unit_created_lazily_and_cached(providers) -> None:
    created = []

    def factory(step):
        unit = OptionSelection(step.kind, step.provider.list_options())
        created.append(unit)
        return unit

    steps = build_steps(providers, factory)
    assert not steps[0].has_unit
    first = steps[0].unit()
    assert steps[0].unit() is first
    assert created == [first]
    assert not steps[1].has_unit


def test_default_units_preselect_builder_choices(make_theme, opts, providers) -> None:
    builder = CustomThemeBuilder(make_theme("custom-1", "F2 I1 C3 S1", is_custom=True))
    steps = build_steps(providers, selection_unit_factory(builder))
    assert [step.unit().selected_option() for step in steps] == [
        opts["F2"], opts["I1"], opts["C3"], opts["S1"]
    ]


class TestOptionSelection:
    """Tests for OptionSelection."""

    def test_select_emits_change_once(self, opts):
        unit = OptionSelection(ComponentKind.FONT, [opts["F1"], opts["F2"]])
        seen = []
        unit.selection_changed.connect(lambda option: seen.append(option))

        unit.select(opts["F2"])
        unit.select(opts["F2"])
        assert unit.selected_option() == opts["F2"]
        assert seen == [opts["F2"]]

    def test_select_rejects_other_kind_or_unknown_option(self, opts):
        unit = OptionSelection(ComponentKind.FONT, [opts["F1"]])
        with pytest.raises(ThemeValidationError):
            unit.select(opts["I1"])
        with pytest.raises(ThemeValidationError):
            unit.select(opts["F2"])

    def test_initial_not_offered_is_ignored(self, opts):
        unit = OptionSelection(ComponentKind.FONT, [opts["F1"]], initial=opts["F3"])
        assert unit.selected_option() is None

    def test_clear(self, opts):
        unit = OptionSelection(ComponentKind.COLOR, [opts["C1"]], initial=opts["C1"])
        seen = []
        unit.selection_changed.connect(lambda option: seen.append(option))
        unit.clear()
        unit.clear()
        assert unit.selected_option() is None
        assert seen == [None]
