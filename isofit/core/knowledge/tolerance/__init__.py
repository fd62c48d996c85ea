"""
Tolerance and Fits Knowledge Module.

Provides ISO standard tolerance values (IT5-IT11), fundamental deviations for
common hole and shaft letters, fit classification and selection guidance.

Reference Standards:
- ISO 286-1:2010 - Geometrical product specifications (GPS) - ISO code system
- ISO 286-2:2010 - Tables of standard tolerance classes and limit deviations
"""

from .it_grades import (
    IT_VALUES,
    SIZE_BOUNDARIES,
    SUPPORTED_IT_GRADES,
    get_it_value,
    get_tolerance_table,
    get_tolerance_value,
    resolve_range,
    size_ranges,
)
from .deviations import (
    SUPPORTED_HOLE_LETTERS,
    SUPPORTED_SHAFT_LETTERS,
    DeviationKind,
    Role,
    ToleranceResult,
    calculate_component,
    format_grade,
    get_deviation_kind,
    get_fundamental_deviation,
    parse_grade,
)
from .fits import FitResult, FitType, classify_fit
from .localization import SUPPORTED_LANGUAGES, error_message, format_summary, translate
from .selection import (
    PREFERRED_FITS,
    FitAdvice,
    PreferredFit,
    advise_fit,
    get_preferred_fits,
    recommend,
)
from .calculator import (
    ISO_STANDARD,
    CalculationMode,
    CalculationResult,
    calculate_tolerance,
    infer_role,
)

__all__ = [
    # IT Grades
    "IT_VALUES",
    "SIZE_BOUNDARIES",
    "SUPPORTED_IT_GRADES",
    "get_it_value",
    "get_tolerance_table",
    "get_tolerance_value",
    "resolve_range",
    "size_ranges",
    # Deviations
    "SUPPORTED_HOLE_LETTERS",
    "SUPPORTED_SHAFT_LETTERS",
    "DeviationKind",
    "Role",
    "ToleranceResult",
    "calculate_component",
    "format_grade",
    "get_deviation_kind",
    "get_fundamental_deviation",
    "parse_grade",
    # Fits
    "FitResult",
    "FitType",
    "classify_fit",
    # Localization
    "SUPPORTED_LANGUAGES",
    "error_message",
    "format_summary",
    "translate",
    # Selection
    "PREFERRED_FITS",
    "FitAdvice",
    "PreferredFit",
    "advise_fit",
    "get_preferred_fits",
    "recommend",
    # Calculator
    "ISO_STANDARD",
    "CalculationMode",
    "CalculationResult",
    "calculate_tolerance",
    "infer_role",
]
