"""
ISO Tolerance Grades (IT Grades) Knowledge Base.

Provides the standard tolerance values of ISO 286-1:2010 for the grades and
size ranges supported by the calculator (IT5..IT11, 0-500 mm).

Reference:
- ISO 286-1:2010 Table 1 - Standard tolerance grades
"""

import math
from typing import Dict, List, Tuple

from isofit.core.errors import OutOfRangeError, UnsupportedGradeError


# Upper bound (inclusive) of each basic size range in mm.
# Range i covers (SIZE_BOUNDARIES[i-1], SIZE_BOUNDARIES[i]]; range 0 covers (0, 3].
SIZE_BOUNDARIES: List[float] = [3, 6, 10, 18, 30, 50, 80, 120, 180, 250, 315, 400, 500]

MIN_NOMINAL_SIZE_MM = 0.0
MAX_NOMINAL_SIZE_MM = 500.0

# Tolerance values in micrometers (μm)
# ISO 286-1:2010 Table 1
# Format: {grade: [value per size range]}
IT_VALUES: Dict[str, List[int]] = {
    "5": [4, 5, 6, 8, 9, 11, 13, 15, 18, 20, 23, 25, 27],
    "6": [6, 8, 9, 11, 13, 16, 19, 22, 25, 29, 32, 36, 40],
    "7": [10, 12, 15, 18, 21, 25, 30, 35, 40, 46, 52, 57, 63],
    "8": [14, 18, 22, 27, 33, 39, 46, 54, 63, 72, 81, 89, 97],
    "9": [25, 30, 36, 43, 52, 62, 74, 87, 100, 115, 130, 140, 155],
    "10": [40, 48, 58, 70, 84, 100, 120, 140, 160, 185, 210, 230, 250],
    "11": [60, 75, 90, 110, 130, 160, 190, 220, 250, 290, 320, 360, 400],
}

SUPPORTED_IT_GRADES: List[str] = list(IT_VALUES)


def size_ranges() -> List[Tuple[float, float]]:
    """Return the size ranges as ``(over, up_to)`` pairs in mm."""
    lowers = [MIN_NOMINAL_SIZE_MM] + SIZE_BOUNDARIES[:-1]
    return list(zip(lowers, SIZE_BOUNDARIES))


def resolve_range(nominal_size_mm: float) -> int:
    """
    Find the size range index for a nominal size.

    A size equal to a boundary belongs to the range ending at that boundary,
    so 3.0 mm resolves to index 0 and 500.0 mm to the last index.

    Raises:
        OutOfRangeError: size is not finite or outside (0, 500] mm

    Example:
        >>> resolve_range(40)
        5
    """
    if not math.isfinite(nominal_size_mm) or not (
        MIN_NOMINAL_SIZE_MM < nominal_size_mm <= MAX_NOMINAL_SIZE_MM
    ):
        raise OutOfRangeError(
            f"Nominal size {nominal_size_mm} mm is outside supported range (0-500 mm)",
            field="nominal_size",
            value=nominal_size_mm,
        )

    for idx, upper in enumerate(SIZE_BOUNDARIES):
        if nominal_size_mm <= upper:
            return idx

    # unreachable: the last boundary equals MAX_NOMINAL_SIZE_MM
    raise OutOfRangeError(
        f"Nominal size {nominal_size_mm} mm has no size range",
        field="nominal_size",
        value=nominal_size_mm,
    )


def get_it_value(grade_number: str, range_index: int, field: str = "grade") -> int:
    """
    Get the IT tolerance in μm for a grade number and size range index.

    Args:
        grade_number: Grade number as written in the grade code ("7" for H7)
        range_index: Index returned by ``resolve_range``
        field: Input field name reported on failure

    Raises:
        UnsupportedGradeError: grade number is not one of IT5..IT11
    """
    values = IT_VALUES.get(grade_number)
    if values is None:
        raise UnsupportedGradeError(
            f"Unsupported IT grade: {grade_number}. "
            f"Supported: {', '.join(SUPPORTED_IT_GRADES)}",
            field=field,
            value=grade_number,
        )
    return values[range_index]


def get_tolerance_value(nominal_size_mm: float, grade: str) -> int:
    """
    Get the tolerance value for a nominal size and IT grade.

    Accepts either the bare number ("7") or the prefixed form ("IT7").

    Example:
        >>> get_tolerance_value(25, "IT7")
        21
    """
    grade_number = grade.strip().upper()
    if grade_number.startswith("IT"):
        grade_number = grade_number[2:]
    return get_it_value(grade_number, resolve_range(nominal_size_mm))


def get_tolerance_table(nominal_size_mm: float) -> Dict[str, int]:
    """Get all supported IT values at one size, keyed ``IT5``..``IT11``."""
    range_index = resolve_range(nominal_size_mm)
    return {f"IT{grade}": values[range_index] for grade, values in IT_VALUES.items()}
