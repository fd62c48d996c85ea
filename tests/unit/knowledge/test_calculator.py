"""Tests for the tolerance calculator entry point."""

import pytest

from isofit.core.errors import (
    ErrorCode,
    InvalidGradeFormatError,
    MissingGradeError,
    OutOfRangeError,
    ToleranceError,
    UnsupportedGradeError,
    UnsupportedLetterError,
)
from isofit.core.knowledge.tolerance import (
    ISO_STANDARD,
    CalculationMode,
    FitType,
    Role,
    calculate_tolerance,
    infer_role,
)


class TestFitMode:
    """Hole/shaft pair calculations."""

    def test_h7_g6_at_40mm(self):
        result = calculate_tolerance(40, CalculationMode.FIT, "H7", "g6")

        assert result.mode == CalculationMode.FIT
        assert (result.hole.upper_deviation_um, result.hole.lower_deviation_um) == (25, 0)
        assert (result.shaft.upper_deviation_um, result.shaft.lower_deviation_um) == (-9, -25)
        assert result.fit.fit_type == FitType.CLEARANCE
        assert result.recommendation_key == "pair.g"
        assert result.recommendation == "Precision Sliding Fit - Parts move/slide accurately."
        assert result.iso_standard == ISO_STANDARD == "ISO 286-1:2010"
        assert result.language == "en"

    def test_h7_p6_at_40mm(self):
        result = calculate_tolerance(40, CalculationMode.FIT, "H7", "p6")

        assert result.fit.fit_type == FitType.INTERFERENCE
        assert result.fit.max_clearance_um == -1
        assert result.fit.min_clearance_um == -42
        assert result.recommendation_key == "pair.p"

    def test_roles_come_from_position(self):
        """Case of the input does not decide hole or shaft in fit mode."""
        result = calculate_tolerance(40, CalculationMode.FIT, "h7", "G6")
        assert result.hole.grade == "H7"
        assert result.shaft.grade == "g6"
        assert result.recommendation_key == "pair.g"

    def test_non_h_hole_uses_fit_type_recommendation(self):
        result = calculate_tolerance(40, CalculationMode.FIT, "F8", "h7")
        assert result.fit.fit_type == FitType.CLEARANCE
        assert result.recommendation_key == "type.Clearance"
        assert result.recommendation == "Parts will slide or run freely."

    def test_mode_accepts_plain_string(self):
        result = calculate_tolerance(40, "FIT", "H7", "k6")
        assert result.mode == CalculationMode.FIT
        assert result.fit.fit_type == FitType.TRANSITION

    @pytest.mark.parametrize("grade2", [None, "", "   "])
    def test_missing_shaft_grade(self, grade2):
        with pytest.raises(MissingGradeError) as exc_info:
            calculate_tolerance(40, CalculationMode.FIT, "H7", grade2)
        assert exc_info.value.code == ErrorCode.MISSING_GRADE
        assert exc_info.value.field == "shaft"


class TestSingleMode:
    """Single component calculations."""

    def test_lowercase_grade_is_shaft(self):
        result = calculate_tolerance(40, CalculationMode.SINGLE, "g6")

        assert result.hole is None
        assert result.fit is None
        assert result.shaft.grade == "g6"
        assert result.recommendation_key == "default"
        assert result.recommendation == "Standard ISO 286 tolerance zone."

    def test_uppercase_grade_is_hole(self):
        result = calculate_tolerance(40, CalculationMode.SINGLE, "H7")

        assert result.shaft is None
        assert result.hole.grade == "H7"
        assert result.recommendation_key == "default"

    def test_second_grade_is_ignored(self):
        result = calculate_tolerance(40, CalculationMode.SINGLE, "H7", "zz")
        assert result.shaft is None
        assert result.fit is None

    def test_infer_role(self):
        assert infer_role("H7") == Role.HOLE
        assert infer_role("g6") == Role.SHAFT
        with pytest.raises(InvalidGradeFormatError):
            infer_role("7")


class TestErrors:
    """Any invalid input aborts the whole calculation."""

    def test_hole_error_reported_before_missing_shaft(self):
        with pytest.raises(InvalidGradeFormatError) as exc_info:
            calculate_tolerance(40, CalculationMode.FIT, "7H", None)
        assert exc_info.value.field == "hole"

    def test_only_subclasses_bind_an_error_code(self):
        assert not hasattr(ToleranceError, "code")
        codes = {
            cls.code
            for cls in (
                OutOfRangeError,
                InvalidGradeFormatError,
                UnsupportedGradeError,
                UnsupportedLetterError,
                MissingGradeError,
            )
        }
        assert codes == set(ErrorCode)

    def test_size_checked_before_grades(self):
        with pytest.raises(OutOfRangeError):
            calculate_tolerance(600, CalculationMode.FIT, "7H", "g6")
        with pytest.raises(OutOfRangeError):
            calculate_tolerance(0, CalculationMode.FIT, "H7", None)

    def test_invalid_hole_format(self):
        with pytest.raises(InvalidGradeFormatError) as exc_info:
            calculate_tolerance(40, CalculationMode.FIT, "7H", "g6")
        assert exc_info.value.field == "hole"

    def test_unsupported_shaft_letter(self):
        with pytest.raises(UnsupportedLetterError) as exc_info:
            calculate_tolerance(40, CalculationMode.FIT, "H7", "x6")
        assert exc_info.value.field == "shaft"

    def test_unsupported_grade(self):
        with pytest.raises(UnsupportedGradeError):
            calculate_tolerance(40, CalculationMode.FIT, "H12", "g6")

    def test_errors_share_a_base_class(self):
        with pytest.raises(ToleranceError) as exc_info:
            calculate_tolerance(40, CalculationMode.SINGLE, "Z7")
        assert exc_info.value.to_dict() == {
            "code": "UNSUPPORTED_LETTER",
            "field": "hole",
            "message": exc_info.value.message,
            "value": "Z",
        }


class TestSummary:
    """Plain-text summary rendering."""

    def test_fit_summary_lines(self):
        summary = calculate_tolerance(40, CalculationMode.FIT, "H7", "g6").text_summary

        assert summary.startswith("Nominal Size: 40 mm")
        assert "Hole [H7]:" in summary
        assert "Upper dev (ES): +25" in summary
        assert "Lower dev (EI): 0" in summary
        assert "Limits: 40.000 - 40.025 mm" in summary
        assert "Shaft [g6]:" in summary
        assert "Upper dev (es): -9" in summary
        assert "Lower dev (ei): -25" in summary
        assert "Limits: 39.975 - 39.991 mm" in summary
        assert "Fit Result: Clearance" in summary
        assert summary.endswith("Recommendation: Precision Sliding Fit - Parts move/slide accurately.")

    def test_single_summary_has_no_fit_line(self):
        summary = calculate_tolerance(40, CalculationMode.SINGLE, "g6").text_summary
        assert "Shaft [g6]:" in summary
        assert "Hole [" not in summary
        assert "Fit Result" not in summary
        assert "Standard ISO 286 tolerance zone." in summary

    def test_german_summary(self):
        result = calculate_tolerance(40, CalculationMode.FIT, "H7", "p6", language="de")

        assert result.language == "de"
        assert result.text_summary.startswith("Nennmaß: 40 mm")
        assert "Passung: Übermaßpassung" in result.text_summary
        assert result.recommendation.startswith("Presspassung")

    @pytest.mark.parametrize(
        "size,expected",
        [(123.4567, "123.4567"), (0.0000123, "0.0000123"), (40.0, "40"), (250, "250")],
    )
    def test_nominal_size_printed_as_entered(self, size, expected):
        summary = calculate_tolerance(size, CalculationMode.SINGLE, "H7").text_summary
        assert summary.startswith(f"Nominal Size: {expected} mm")

    def test_unknown_language_falls_back_to_english(self):
        result = calculate_tolerance(40, CalculationMode.FIT, "H7", "g6", language="fr")
        assert result.language == "en"
        assert "Fit Result: Clearance" in result.text_summary
