"""
ISO Fit Classification.

Combines a hole and a shaft tolerance class at the same nominal size into a
clearance, transition or interference fit by interval arithmetic on the
limit deviations.

Reference:
- ISO 286-1:2010 Section 3.3 - Fits
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .deviations import ToleranceResult
from .localization import DEFAULT_LANGUAGE, describe_fit


class FitType(str, Enum):
    """Classification of fits by clearance/interference."""

    CLEARANCE = "Clearance"
    TRANSITION = "Transition"
    INTERFERENCE = "Interference"


@dataclass(frozen=True)
class FitResult:
    """Classification and clearance/interference extremes of a fit (μm)."""

    fit_type: FitType
    max_clearance_um: int  # hole ES - shaft ei, negative means interference
    min_clearance_um: int  # hole EI - shaft es, negative means interference
    description: str
    max_clearance: Optional[int] = None
    min_clearance: Optional[int] = None
    max_interference: Optional[int] = None
    min_interference: Optional[int] = None


def classify_fit(
    hole: ToleranceResult,
    shaft: ToleranceResult,
    language: str = DEFAULT_LANGUAGE,
) -> FitResult:
    """
    Classify the fit between a hole and a shaft.

    Args:
        hole: Hole tolerance (ES/EI)
        shaft: Shaft tolerance (es/ei) at the same nominal size
        language: Language of the description text

    Returns:
        FitResult; the numeric fields depend only on the four deviations

    Example:
        >>> fit = classify_fit(hole_h7, shaft_g6)  # 40 mm
        >>> fit.fit_type, fit.max_clearance, fit.min_clearance
        (<FitType.CLEARANCE: 'Clearance'>, 50, 9)
    """
    max_clearance = hole.upper_deviation_um - shaft.lower_deviation_um
    min_clearance = hole.lower_deviation_um - shaft.upper_deviation_um

    if min_clearance >= 0:
        fit_type = FitType.CLEARANCE
        extremes = dict(max_clearance=max_clearance, min_clearance=min_clearance)
    elif max_clearance <= 0:
        fit_type = FitType.INTERFERENCE
        extremes = dict(
            max_interference=abs(min_clearance),
            min_interference=abs(max_clearance),
        )
    else:
        fit_type = FitType.TRANSITION
        extremes = dict(
            max_clearance=max_clearance,
            max_interference=abs(min_clearance),
        )

    return FitResult(
        fit_type=fit_type,
        max_clearance_um=max_clearance,
        min_clearance_um=min_clearance,
        description=describe_fit(fit_type.value, max_clearance, min_clearance, language),
        **extremes,
    )
