"""Tests for fit classification."""

import pytest

from isofit.core.knowledge.tolerance import (
    FitType,
    Role,
    ToleranceResult,
    calculate_component,
    classify_fit,
)


def _component(upper: int, lower: int, role: Role) -> ToleranceResult:
    return ToleranceResult(
        grade="H7" if role == Role.HOLE else "h6",
        role=role,
        nominal_size_mm=10.0,
        upper_deviation_um=upper,
        lower_deviation_um=lower,
        max_size_mm=10.0 + upper / 1000,
        min_size_mm=10.0 + lower / 1000,
        it_value_um=upper - lower,
    )


def _fit(size, hole, shaft, language="en"):
    return classify_fit(
        calculate_component(size, hole, Role.HOLE),
        calculate_component(size, shaft, Role.SHAFT),
        language,
    )


class TestClassifyFit:
    """Tests for clearance/transition/interference classification."""

    def test_h7_g6_is_clearance(self):
        fit = _fit(40, "H7", "g6")

        assert fit.fit_type == FitType.CLEARANCE
        assert fit.max_clearance_um == 50
        assert fit.min_clearance_um == 9
        assert fit.max_clearance == 50
        assert fit.min_clearance == 9
        assert fit.max_interference is None
        assert fit.min_interference is None

    def test_h7_p6_is_interference(self):
        fit = _fit(40, "H7", "p6")

        assert fit.fit_type == FitType.INTERFERENCE
        assert fit.max_clearance_um == -1
        assert fit.min_clearance_um == -42
        assert fit.max_interference == 42
        assert fit.min_interference == 1
        assert fit.max_clearance is None

    def test_h7_k6_is_transition(self):
        fit = _fit(40, "H7", "k6")

        assert fit.fit_type == FitType.TRANSITION
        assert fit.max_clearance == 23
        assert fit.max_interference == 18
        assert fit.min_clearance is None
        assert fit.min_interference is None

    def test_zero_minimum_clearance_is_clearance(self):
        """H7/h6 touches at the maximum material condition."""
        fit = _fit(40, "H7", "h6")
        assert fit.min_clearance_um == 0
        assert fit.fit_type == FitType.CLEARANCE

    def test_zero_maximum_clearance_is_interference(self):
        hole = _component(10, 0, Role.HOLE)
        shaft = _component(20, 10, Role.SHAFT)

        fit = classify_fit(hole, shaft)
        assert fit.max_clearance_um == 0
        assert fit.fit_type == FitType.INTERFERENCE
        assert fit.min_interference == 0

    def test_classification_is_idempotent(self):
        hole = calculate_component(40, "H7", Role.HOLE)
        shaft = calculate_component(40, "n6", Role.SHAFT)
        assert classify_fit(hole, shaft) == classify_fit(hole, shaft)

    @pytest.mark.parametrize("size", [2, 18, 65, 250, 500])
    def test_h7_g6_clearance_at_all_sizes(self, size):
        assert _fit(size, "H7", "g6").fit_type == FitType.CLEARANCE

    @pytest.mark.parametrize("size", [20, 65, 250, 500])
    def test_h7_s6_interference(self, size):
        assert _fit(size, "H7", "s6").fit_type == FitType.INTERFERENCE


class TestFitDescription:
    """The description is rendered in the requested language."""

    def test_english_description(self):
        fit = _fit(40, "H7", "g6")
        assert fit.description.startswith("Always a gap.")
        assert "50" in fit.description
        assert "9" in fit.description

    def test_german_description(self):
        fit = _fit(40, "H7", "p6", language="de")
        assert fit.description.startswith("Immer Übermaß.")
        assert "42" in fit.description

    def test_numbers_do_not_depend_on_language(self):
        en = _fit(40, "H7", "k6", language="en")
        de = _fit(40, "H7", "k6", language="de")
        assert en.fit_type == de.fit_type
        assert (en.max_clearance_um, en.min_clearance_um) == (de.max_clearance_um, de.min_clearance_um)
        assert en.description != de.description
