"""
ISO Fundamental Deviations Knowledge Base.

Fundamental deviations for the supported hole letters (F, G, H, N, P) and
shaft letters (d, e, f, g, h, k, m, n, p, r, s), and the derivation of the
upper/lower limit deviations of a single tolerance class such as H7 or g6.

Reference:
- ISO 286-1:2010 Table 2 (shafts) and Table 3 (holes, including Δ values)
- ISO 286-2:2010 - Tables of standard tolerance classes and limit deviations
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, NamedTuple, Tuple

from isofit.core.errors import InvalidGradeFormatError, UnsupportedLetterError

from .it_grades import get_it_value, resolve_range

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Which part of a fit a tolerance class applies to."""

    HOLE = "hole"
    SHAFT = "shaft"


class DeviationKind(str, Enum):
    """Which limit the fundamental deviation of a letter fixes."""

    UPPER = "upper"  # es / ES
    LOWER = "lower"  # ei / EI


# Fundamental deviations for shafts (μm), one value per basic size range.
# d..h: value is es (upper deviation); k..s: value is ei (lower deviation).
SHAFT_FUNDAMENTAL_DEVIATIONS: Dict[str, List[int]] = {
    "d": [-20, -30, -40, -50, -65, -80, -100, -120, -145, -170, -190, -210, -230],
    "e": [-14, -20, -25, -32, -40, -50, -60, -72, -85, -100, -110, -125, -135],
    "f": [-6, -10, -13, -16, -20, -25, -30, -36, -43, -50, -56, -62, -68],
    "g": [-2, -4, -5, -6, -7, -9, -10, -12, -14, -15, -17, -18, -20],
    "h": [0] * 13,
    # k applies to IT4..IT7 only, see _shaft_fundamental_deviation
    "k": [0, 1, 1, 1, 2, 2, 2, 3, 3, 4, 4, 4, 5],
    "m": [2, 4, 6, 7, 8, 9, 11, 13, 15, 17, 20, 21, 23],
    "n": [4, 8, 10, 12, 15, 17, 20, 23, 27, 31, 34, 37, 40],
    "p": [6, 12, 15, 18, 22, 26, 32, 37, 43, 50, 56, 62, 68],
    # r, s: first intermediate step of each range, refined above 50 mm
    "r": [10, 15, 19, 23, 28, 34, 41, 51, 63, 77, 94, 108, 126],
    "s": [14, 19, 23, 28, 35, 43, 53, 71, 92, 122, 158, 190, 232],
}

# Fundamental deviations for holes (μm), one value per basic size range.
# F..H: value is EI (lower deviation); N, P: value is ES before the Δ correction.
HOLE_FUNDAMENTAL_DEVIATIONS: Dict[str, List[int]] = {
    "H": [0] * 13,
    "F": [6, 10, 13, 16, 20, 25, 30, 36, 43, 50, 56, 62, 68],
    "G": [2, 4, 5, 6, 7, 9, 10, 12, 14, 15, 17, 18, 20],
    "N": [-4, -8, -10, -12, -15, -17, -20, -23, -27, -31, -34, -37, -40],
    "P": [-6, -12, -15, -18, -22, -26, -32, -37, -43, -50, -56, -62, -68],
}

SHAFT_DEVIATION_KINDS: Dict[str, DeviationKind] = {
    "d": DeviationKind.UPPER,
    "e": DeviationKind.UPPER,
    "f": DeviationKind.UPPER,
    "g": DeviationKind.UPPER,
    "h": DeviationKind.UPPER,
    "k": DeviationKind.LOWER,
    "m": DeviationKind.LOWER,
    "n": DeviationKind.LOWER,
    "p": DeviationKind.LOWER,
    "r": DeviationKind.LOWER,
    "s": DeviationKind.LOWER,
}

HOLE_DEVIATION_KINDS: Dict[str, DeviationKind] = {
    "F": DeviationKind.LOWER,
    "G": DeviationKind.LOWER,
    "H": DeviationKind.LOWER,
    "N": DeviationKind.UPPER,
    "P": DeviationKind.UPPER,
}

# Intermediate size steps above 50 mm for r and s shafts.
# Format: {symbol: [(size_upper_bound, ei_um), ...]}
INTERMEDIATE_DEVIATIONS: Dict[str, List[Tuple[float, int]]] = {
    "r": [
        (65, 41), (80, 43), (100, 51), (120, 54), (140, 63), (160, 65),
        (180, 68), (200, 77), (225, 80), (250, 84), (280, 94), (315, 98),
        (355, 108), (400, 114), (450, 126), (500, 132),
    ],
    "s": [
        (65, 53), (80, 59), (100, 71), (120, 79), (140, 92), (160, 100),
        (180, 108), (200, 122), (225, 130), (250, 140), (280, 158), (315, 170),
        (355, 190), (400, 208), (450, 232), (500, 252),
    ],
}
INTERMEDIATE_STEPS_ABOVE_MM = 50.0

# Δ values (μm) added to the ES of N (up to IT8) and P (up to IT7) holes.
# Format: {grade: [value per size range]}
DELTA_VALUES: Dict[str, List[int]] = {
    "5": [0, 1, 2, 3, 3, 4, 5, 5, 6, 6, 7, 7, 7],
    "6": [0, 3, 3, 3, 4, 5, 6, 7, 7, 9, 9, 11, 13],
    "7": [0, 4, 6, 7, 8, 9, 11, 13, 15, 17, 20, 21, 23],
    "8": [0, 6, 7, 9, 12, 14, 16, 19, 23, 26, 29, 32, 34],
}

# Highest IT grade for which the Δ correction applies, per hole letter.
DELTA_MAX_GRADE: Dict[str, int] = {"N": 8, "P": 7}

# Grades for which the tabulated k deviation applies; other grades use ei = 0.
K_DEVIATION_GRADES = range(4, 8)

SUPPORTED_HOLE_LETTERS: List[str] = ["H", "F", "G", "N", "P"]
SUPPORTED_SHAFT_LETTERS: List[str] = ["d", "e", "f", "g", "h", "k", "m", "n", "p", "r", "s"]

_GRADE_PATTERN = re.compile(r"([A-Za-z]+)([0-9]+)")


class ParsedGrade(NamedTuple):
    letters: str
    number: str


@dataclass(frozen=True)
class ToleranceResult:
    """Limit deviations and limits of sizes for one hole or shaft."""

    grade: str  # canonical case, e.g. "H7", "g6"
    role: Role
    nominal_size_mm: float
    upper_deviation_um: int  # ES / es
    lower_deviation_um: int  # EI / ei
    max_size_mm: float
    min_size_mm: float
    it_value_um: int

    @property
    def letters(self) -> str:
        return parse_grade(self.grade).letters

    @property
    def tolerance_zone_um(self) -> int:
        return self.upper_deviation_um - self.lower_deviation_um


def parse_grade(code: str, field: str = "grade") -> ParsedGrade:
    """
    Split a grade code into its letters and grade number.

    The whole string must be letters followed by digits ("H7", "g6").
    Whether the letters and number are supported is checked later.

    Raises:
        InvalidGradeFormatError: code has any other shape ("7H", "H 7", "")
    """
    match = _GRADE_PATTERN.fullmatch(code or "")
    if not match:
        raise InvalidGradeFormatError(
            f"Invalid grade format: {code!r}. Expected Letter+Number (e.g., H7, g6)",
            field=field,
            value=code,
        )
    return ParsedGrade(match.group(1), match.group(2))


def format_grade(letters: str, number: str, role: Role) -> str:
    """Build a grade code in the canonical case for the role (H7 / g6)."""
    letters = letters.upper() if role == Role.HOLE else letters.lower()
    return f"{letters}{number}"


def get_deviation_kind(symbol: str, role: Role) -> DeviationKind:
    """Return which limit the fundamental deviation of ``symbol`` fixes."""
    if role == Role.HOLE:
        kind = HOLE_DEVIATION_KINDS.get(symbol.upper())
    else:
        kind = SHAFT_DEVIATION_KINDS.get(symbol.lower())
    if kind is None:
        raise UnsupportedLetterError(
            f"Unsupported {role.value} deviation: {symbol}",
            field=role.value,
            value=symbol,
        )
    return kind


def _shaft_fundamental_deviation(
    symbol: str,
    grade_number: str,
    nominal_size_mm: float,
    range_index: int,
) -> int:
    values = SHAFT_FUNDAMENTAL_DEVIATIONS.get(symbol)
    if values is None:
        raise UnsupportedLetterError(
            f"Unsupported Shaft Deviation: {symbol}",
            field=Role.SHAFT.value,
            value=symbol,
        )

    if symbol == "k" and int(grade_number) not in K_DEVIATION_GRADES:
        return 0

    steps = INTERMEDIATE_DEVIATIONS.get(symbol)
    if steps and nominal_size_mm > INTERMEDIATE_STEPS_ABOVE_MM:
        for size_upper, deviation in steps:
            if nominal_size_mm <= size_upper:
                return deviation

    return values[range_index]


def _hole_fundamental_deviation(
    symbol: str,
    grade_number: str,
    range_index: int,
) -> int:
    values = HOLE_FUNDAMENTAL_DEVIATIONS.get(symbol)
    if values is None:
        # H is the zero-line hole and always resolves
        if symbol == "H":
            return 0
        raise UnsupportedLetterError(
            f"Unsupported Hole Deviation: {symbol}",
            field=Role.HOLE.value,
            value=symbol,
        )

    deviation = values[range_index]
    max_delta_grade = DELTA_MAX_GRADE.get(symbol)
    if max_delta_grade is None:
        return deviation

    grade = int(grade_number)
    if grade <= max_delta_grade:
        return deviation + DELTA_VALUES[grade_number][range_index]
    if symbol == "N" and range_index > 0:
        return 0
    return deviation


def get_fundamental_deviation(
    symbol: str,
    role: Role,
    grade_number: str,
    nominal_size_mm: float,
) -> Tuple[DeviationKind, int]:
    """
    Look up the fundamental deviation of a tolerance class.

    Hole letters are matched as uppercase and shaft letters as lowercase,
    whatever case the caller used.

    Returns:
        (kind, deviation_um): which limit the value fixes and the value in μm

    Raises:
        OutOfRangeError: nominal size outside (0, 500] mm
        UnsupportedLetterError: letter not in the role's table
    """
    range_index = resolve_range(nominal_size_mm)
    if role == Role.HOLE:
        symbol = symbol.upper()
        deviation = _hole_fundamental_deviation(symbol, grade_number, range_index)
        kind = HOLE_DEVIATION_KINDS.get(symbol, DeviationKind.LOWER)
    else:
        symbol = symbol.lower()
        deviation = _shaft_fundamental_deviation(
            symbol, grade_number, nominal_size_mm, range_index
        )
        kind = SHAFT_DEVIATION_KINDS[symbol]
    return kind, deviation


def calculate_component(nominal_size_mm: float, grade: str, role: Role) -> ToleranceResult:
    """
    Calculate the limit deviations and limits of size for one component.

    Args:
        nominal_size_mm: Nominal size in mm, 0 < size <= 500
        grade: Tolerance class such as "H7" or "g6" (any case)
        role: Whether the class applies to the hole or the shaft

    Returns:
        ToleranceResult with integer deviations in μm

    Raises:
        OutOfRangeError, InvalidGradeFormatError, UnsupportedGradeError,
        UnsupportedLetterError

    Example:
        >>> r = calculate_component(40, "g6", Role.SHAFT)
        >>> (r.upper_deviation_um, r.lower_deviation_um)
        (-9, -25)
    """
    range_index = resolve_range(nominal_size_mm)

    letters, number = parse_grade(grade, field=role.value)

    it_value = get_it_value(number, range_index, field=role.value)
    kind, fundamental = get_fundamental_deviation(letters, role, number, nominal_size_mm)

    if kind == DeviationKind.UPPER:
        upper = fundamental
        lower = upper - it_value
    else:
        lower = fundamental
        upper = lower + it_value

    label = format_grade(letters, number, role)
    logger.debug(
        "Calculated %s %s @ %s mm: upper=%s lower=%s IT=%s",
        role.value,
        label,
        nominal_size_mm,
        upper,
        lower,
        it_value,
    )
    return ToleranceResult(
        grade=label,
        role=role,
        nominal_size_mm=nominal_size_mm,
        upper_deviation_um=upper,
        lower_deviation_um=lower,
        max_size_mm=nominal_size_mm + upper / 1000,
        min_size_mm=nominal_size_mm + lower / 1000,
        it_value_um=it_value,
    )
