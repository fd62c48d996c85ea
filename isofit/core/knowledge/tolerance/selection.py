"""
Fit Selection Guidance Knowledge Base.

Recommendation keys for calculated fits, the list of preferred fits, and a
small advisor that picks a fit from the function of the assembly.

Reference:
- ISO 286-1:2010 Annex B - Guide to the selection of fits
- Engineering design handbooks
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .fits import FitType

# Recommendation keys resolved to text by the localization module
DEFAULT_RECOMMENDATION = "default"
UNKNOWN_FIT_TYPE = "Unknown"

# Shaft letters with a specific recommendation when paired with an H hole
PAIR_RECOMMENDATIONS: Dict[str, str] = {
    letter: f"pair.{letter}" for letter in ("d", "e", "f", "g", "h", "k", "m", "n", "p", "r", "s")
}

TYPE_RECOMMENDATIONS: Dict[str, str] = {
    FitType.CLEARANCE.value: f"type.{FitType.CLEARANCE.value}",
    FitType.INTERFERENCE.value: f"type.{FitType.INTERFERENCE.value}",
    FitType.TRANSITION.value: f"type.{FitType.TRANSITION.value}",
}


def recommend(hole_grade: str, shaft_grade: str, fit_type: str) -> str:
    """
    Select the recommendation key for a calculation.

    Lookup order: hole-basis pair (H hole + shaft letter) -> fit type ->
    default tolerance zone text when there is no fit at all.

    Args:
        hole_grade: Hole class, e.g. "H7" (may be empty in single mode)
        shaft_grade: Shaft class, e.g. "g6", or "" in single mode
        fit_type: "Clearance", "Interference", "Transition" or "Unknown"
    """
    hole = (hole_grade or "").upper()
    shaft = (shaft_grade or "").lower()

    if hole.startswith("H") and shaft:
        key = PAIR_RECOMMENDATIONS.get(shaft[0])
        if key is not None:
            return key

    return TYPE_RECOMMENDATIONS.get(fit_type, DEFAULT_RECOMMENDATION)


@dataclass(frozen=True)
class PreferredFit:
    """A commonly used hole-basis fit."""

    code: str
    category: str
    description: str
    fit_type: FitType


PREFERRED_FITS: List[PreferredFit] = [
    # Clearance
    PreferredFit(
        "H9/d9", "Loose Running",
        "Wide commercial tolerance. For loose pulleys, agricultural mach.",
        FitType.CLEARANCE,
    ),
    PreferredFit(
        "H8/e8", "Loose Running",
        "Good clearance. For main bearings, heavy machinery.",
        FitType.CLEARANCE,
    ),
    PreferredFit(
        "H8/f7", "Running",
        "Average quality. For lubricated bearings, gearboxes.",
        FitType.CLEARANCE,
    ),
    PreferredFit(
        "H7/g6", "Sliding",
        "Precision running. For accurate guiding, sliding parts.",
        FitType.CLEARANCE,
    ),
    PreferredFit(
        "H7/h6", "Locational",
        "Locational clearance. Easy assembly, stationary parts.",
        FitType.CLEARANCE,
    ),
    # Transition
    PreferredFit(
        "H7/k6", "Locational",
        "Locational transition. Gears, pulleys. No sliding.",
        FitType.TRANSITION,
    ),
    PreferredFit(
        "H7/n6", "Transition",
        "Tight location. Assembly with mallet/press. Rigid.",
        FitType.TRANSITION,
    ),
    # Interference
    PreferredFit(
        "H7/p6", "Press Fit",
        "Locational interference. Standard press fit.",
        FitType.INTERFERENCE,
    ),
    PreferredFit(
        "H7/s6", "Drive Fit",
        "Medium drive fit. Permanent assembly, heavy duty.",
        FitType.INTERFERENCE,
    ),
]


def get_preferred_fits(fit_type: Optional[FitType] = None) -> List[PreferredFit]:
    """Preferred fits, optionally filtered by fit type."""
    if fit_type is None:
        return list(PREFERRED_FITS)
    return [fit for fit in PREFERRED_FITS if fit.fit_type == fit_type]


class FitSystem(str, Enum):
    GENERAL = "general"  # hole basis by default
    HOLE = "hole"
    SHAFT = "shaft"


class Movement(str, Enum):
    MOVING = "moving"  # shaft rotates or slides inside the hole
    FIXED = "fixed"  # parts stationary relative to each other


class Condition(str, Enum):
    LOOSE = "loose"
    RUNNING = "running"
    PRECISION = "precision"
    REMOVABLE = "removable"
    RIGID = "rigid"
    PERMANENT = "permanent"
    DRIVE = "drive"


ADVISOR_RULES: Dict[Movement, Dict[Condition, str]] = {
    Movement.MOVING: {
        Condition.LOOSE: "H9/d9",
        Condition.RUNNING: "H8/f7",
        Condition.PRECISION: "H7/g6",
    },
    Movement.FIXED: {
        Condition.REMOVABLE: "H7/h6",
        Condition.RIGID: "H7/k6",
        Condition.PERMANENT: "H7/p6",
        Condition.DRIVE: "H7/s6",
    },
}

ADVISOR_FIT_TYPES: Dict[str, FitType] = {
    "H9/d9": FitType.CLEARANCE,
    "H8/f7": FitType.CLEARANCE,
    "H7/g6": FitType.CLEARANCE,
    "H7/h6": FitType.CLEARANCE,
    "H7/k6": FitType.TRANSITION,
    "H7/p6": FitType.INTERFERENCE,
    "H7/s6": FitType.INTERFERENCE,
}

SHAFT_BASIS_EQUIVALENTS: Dict[str, str] = {
    "H9/d9": "D9/h9",
    "H8/f7": "F8/h7",
    "H7/g6": "G7/h6",
    "H7/h6": "H7/h6",
    "H7/k6": "K7/h6",
    "H7/p6": "P7/h6",
    "H7/s6": "S7/h6",
}


@dataclass(frozen=True)
class FitAdvice:
    code: str  # fit code in the requested system
    hole_basis_code: str  # key for advisor texts
    fit_type: FitType
    system: FitSystem


def advise_fit(movement: str, condition: str, system: str = FitSystem.GENERAL.value) -> FitAdvice:
    """
    Pick a fit from the function of the assembly.

    Args:
        movement: "moving" or "fixed"
        condition: requirement valid for the movement (e.g. "running" for
            moving parts, "permanent" for fixed parts)
        system: "general" or "hole" for hole basis, "shaft" for shaft basis

    Raises:
        ValueError: unknown movement, condition or system, or a condition
            that does not apply to the movement
    """
    movement_key = Movement(movement)
    condition_key = Condition(condition)
    system_key = FitSystem(system)

    code = ADVISOR_RULES[movement_key].get(condition_key)
    if code is None:
        raise ValueError(
            f"Condition {condition_key.value!r} does not apply to {movement_key.value} parts"
        )

    final_code = code
    if system_key == FitSystem.SHAFT:
        final_code = SHAFT_BASIS_EQUIVALENTS[code]

    return FitAdvice(
        code=final_code,
        hole_basis_code=code,
        fit_type=ADVISOR_FIT_TYPES[code],
        system=system_key,
    )
