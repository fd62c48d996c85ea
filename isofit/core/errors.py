"""Error codes and exceptions raised by the tolerance engine.

Every failure carries a stable ``ErrorCode`` plus the input field and value
that caused it, so presentation layers can branch on the kind of failure and
show a distinct message for each.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    OUT_OF_RANGE = "OUT_OF_RANGE"  # nominal size outside (0, 500] mm
    INVALID_FORMAT = "INVALID_FORMAT"  # grade is not letters followed by digits
    UNSUPPORTED_GRADE = "UNSUPPORTED_GRADE"  # IT number not tabulated
    UNSUPPORTED_LETTER = "UNSUPPORTED_LETTER"  # deviation letter not tabulated
    MISSING_GRADE = "MISSING_GRADE"  # fit mode without a shaft grade


class ToleranceError(ValueError):
    """Base class for all engine input errors."""

    code: ErrorCode

    def __init__(self, message: str, field: str, value: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "code": self.code.value,
            "field": self.field,
            "message": self.message,
        }
        if self.value is not None:
            result["value"] = self.value
        return result


class OutOfRangeError(ToleranceError):
    code = ErrorCode.OUT_OF_RANGE


class InvalidGradeFormatError(ToleranceError):
    code = ErrorCode.INVALID_FORMAT


class UnsupportedGradeError(ToleranceError):
    code = ErrorCode.UNSUPPORTED_GRADE


class UnsupportedLetterError(ToleranceError):
    code = ErrorCode.UNSUPPORTED_LETTER


class MissingGradeError(ToleranceError):
    code = ErrorCode.MISSING_GRADE


__all__ = [
    "ErrorCode",
    "ToleranceError",
    "OutOfRangeError",
    "InvalidGradeFormatError",
    "UnsupportedGradeError",
    "UnsupportedLetterError",
    "MissingGradeError",
]
