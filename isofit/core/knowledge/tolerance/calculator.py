"""
Tolerance calculation entry point.

Runs a single-component or a hole/shaft fit calculation and packages the
results, the recommendation and a plain-text summary for presentation.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from isofit.core.errors import MissingGradeError

from .deviations import Role, ToleranceResult, calculate_component, parse_grade
from .fits import FitResult, classify_fit
from .it_grades import resolve_range
from .localization import format_summary, normalize_language, recommendation_text
from .selection import UNKNOWN_FIT_TYPE, recommend

logger = logging.getLogger(__name__)

ISO_STANDARD = "ISO 286-1:2010"


class CalculationMode(str, Enum):
    SINGLE = "SINGLE"
    FIT = "FIT"


@dataclass(frozen=True)
class CalculationResult:
    """Everything a presentation layer needs to render one calculation."""

    nominal_size_mm: float
    mode: CalculationMode
    hole: Optional[ToleranceResult]
    shaft: Optional[ToleranceResult]
    fit: Optional[FitResult]
    recommendation_key: str
    recommendation: str
    iso_standard: str
    language: str
    text_summary: str


def infer_role(grade: str) -> Role:
    """
    Infer hole or shaft from the case of the first letter of a grade.

    Only used for single-component calculations; fit calculations take the
    role from the argument position.
    """
    letters, _ = parse_grade(grade)
    return Role.HOLE if letters[0].isupper() else Role.SHAFT


def calculate_tolerance(
    nominal_size_mm: float,
    mode: CalculationMode,
    grade1: str,
    grade2: Optional[str] = None,
    language: Optional[str] = None,
) -> CalculationResult:
    """
    Calculate a tolerance zone or a fit.

    Args:
        nominal_size_mm: Nominal size in mm, 0 < size <= 500
        mode: SINGLE for one component, FIT for a hole/shaft pair
        grade1: In FIT mode the hole class; in SINGLE mode any class, whose
            letter case selects hole (upper) or shaft (lower)
        grade2: Shaft class, required in FIT mode and ignored otherwise
        language: Language of the text fields (defaults to English)

    Raises:
        ToleranceError: any invalid input; no partial result is returned

    Example:
        >>> result = calculate_tolerance(40, CalculationMode.FIT, "H7", "g6")
        >>> result.fit.fit_type.value
        'Clearance'
    """
    mode = CalculationMode(mode)
    language = normalize_language(language)

    # the size is checked before any grade so that it is reported first
    resolve_range(nominal_size_mm)

    hole: Optional[ToleranceResult] = None
    shaft: Optional[ToleranceResult] = None
    fit: Optional[FitResult] = None

    if mode == CalculationMode.FIT:
        # the hole is validated before the shaft is required
        hole = calculate_component(nominal_size_mm, grade1, Role.HOLE)
        if not grade2 or not grade2.strip():
            raise MissingGradeError(
                "Shaft grade is required in fit mode",
                field=Role.SHAFT.value,
            )
        shaft = calculate_component(nominal_size_mm, grade2, Role.SHAFT)
        fit = classify_fit(hole, shaft, language)
    else:
        if grade2:
            logger.debug("Ignoring second grade %r in single mode", grade2)
        role = infer_role(grade1)
        component = calculate_component(nominal_size_mm, grade1, role)
        if role == Role.HOLE:
            hole = component
        else:
            shaft = component

    fit_type = fit.fit_type.value if fit is not None else UNKNOWN_FIT_TYPE
    key = recommend(
        hole.grade if hole is not None else "",
        shaft.grade if shaft is not None and fit is not None else "",
        fit_type,
    )

    result = CalculationResult(
        nominal_size_mm=nominal_size_mm,
        mode=mode,
        hole=hole,
        shaft=shaft,
        fit=fit,
        recommendation_key=key,
        recommendation=recommendation_text(key, language),
        iso_standard=ISO_STANDARD,
        language=language,
        text_summary="",
    )
    return _with_summary(result)


def _with_summary(result: CalculationResult) -> CalculationResult:
    return replace(result, text_summary=format_summary(result, result.language))
