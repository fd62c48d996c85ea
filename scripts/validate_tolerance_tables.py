#!/usr/bin/env python3
"""Validate the ISO 286 tables shipped in `isofit/core/knowledge/tolerance`.

It is intentionally conservative:
- checks table shapes against the size ranges,
- checks monotonic IT values (by grade and by size range),
- checks that every supported letter has a deviation kind,
- optionally runs a few spot-check calculations through the public API.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from isofit.core.knowledge.tolerance import deviations, it_grades  # noqa: E402
from isofit.core.knowledge.tolerance import (  # noqa: E402
    FitType,
    Role,
    calculate_component,
    classify_fit,
)


@dataclass(frozen=True)
class ValidationIssue:
    severity: str  # "error" | "warning"
    message: str


def _check_row_length(table: str, label: str, row: Sequence[int]) -> List[ValidationIssue]:
    expected = len(it_grades.SIZE_BOUNDARIES)
    if len(row) != expected:
        return [
            ValidationIssue(
                "error",
                f"{table}.{label}: expected {expected} values (one per size range), got {len(row)}",
            )
        ]
    return []


def validate_tables() -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    boundaries = it_grades.SIZE_BOUNDARIES
    for idx in range(1, len(boundaries)):
        if boundaries[idx] <= boundaries[idx - 1]:
            issues.append(
                ValidationIssue(
                    "error",
                    f"size boundaries not strictly increasing at [{idx}] "
                    f"(prev={boundaries[idx - 1]}, got={boundaries[idx]})",
                )
            )
    if boundaries[-1] != it_grades.MAX_NOMINAL_SIZE_MM:
        issues.append(
            ValidationIssue("error", f"last boundary {boundaries[-1]} != max nominal size")
        )

    prev_row: Tuple[str, Sequence[int]] = ("", [])
    for grade, row in it_grades.IT_VALUES.items():
        issues.extend(_check_row_length("IT_VALUES", grade, row))
        for idx in range(1, len(row)):
            if row[idx] < row[idx - 1]:
                issues.append(
                    ValidationIssue("error", f"IT{grade}[{idx}]: decreasing with size range")
                )
        prev_grade, prev_values = prev_row
        if prev_values and any(a > b for a, b in zip(prev_values, row)):
            issues.append(
                ValidationIssue("error", f"IT{grade}: smaller than IT{prev_grade} in some range")
            )
        prev_row = (grade, row)

    tables: Dict[str, Dict[str, List[int]]] = {
        "SHAFT_FUNDAMENTAL_DEVIATIONS": deviations.SHAFT_FUNDAMENTAL_DEVIATIONS,
        "HOLE_FUNDAMENTAL_DEVIATIONS": deviations.HOLE_FUNDAMENTAL_DEVIATIONS,
        "DELTA_VALUES": deviations.DELTA_VALUES,
    }
    for table_name, table in tables.items():
        for label, row in table.items():
            issues.extend(_check_row_length(table_name, label, row))

    for letter in deviations.SUPPORTED_SHAFT_LETTERS:
        if letter not in deviations.SHAFT_DEVIATION_KINDS:
            issues.append(ValidationIssue("error", f"shaft letter {letter}: no deviation kind"))
        if letter not in deviations.SHAFT_FUNDAMENTAL_DEVIATIONS:
            issues.append(ValidationIssue("error", f"shaft letter {letter}: no deviation values"))
    for letter in deviations.SUPPORTED_HOLE_LETTERS:
        if letter not in deviations.HOLE_DEVIATION_KINDS:
            issues.append(ValidationIssue("error", f"hole letter {letter}: no deviation kind"))
        if letter not in deviations.HOLE_FUNDAMENTAL_DEVIATIONS and letter != "H":
            issues.append(ValidationIssue("error", f"hole letter {letter}: no deviation values"))

    for symbol, steps in deviations.INTERMEDIATE_DEVIATIONS.items():
        uppers = [size for size, _ in steps]
        if uppers != sorted(uppers) or uppers[-1] != it_grades.MAX_NOMINAL_SIZE_MM:
            issues.append(
                ValidationIssue("error", f"intermediate steps for {symbol}: bad size bounds")
            )

    return issues


# (nominal, grade, role, upper, lower) in μm, from ISO 286-2 tables
SPOT_CHECKS = [
    (40.0, "H7", Role.HOLE, 25, 0),
    (40.0, "g6", Role.SHAFT, -9, -25),
    (40.0, "p6", Role.SHAFT, 42, 26),
    (40.0, "k6", Role.SHAFT, 18, 2),
    (40.0, "N7", Role.HOLE, -8, -33),
    (40.0, "P7", Role.HOLE, -17, -42),
    (25.0, "H7", Role.HOLE, 21, 0),
    (10.0, "g6", Role.SHAFT, -5, -14),
    (70.0, "r6", Role.SHAFT, 62, 43),
    (100.0, "s6", Role.SHAFT, 93, 71),
]


def run_spot_checks() -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    for nominal, grade, role, upper, lower in SPOT_CHECKS:
        result = calculate_component(nominal, grade, role)
        got = (result.upper_deviation_um, result.lower_deviation_um)
        if got != (upper, lower):
            issues.append(
                ValidationIssue(
                    "error",
                    f"spot-check {grade}@{nominal:g}mm expected ({upper},{lower}), got {got}",
                )
            )

    fit = classify_fit(
        calculate_component(40.0, "H7", Role.HOLE),
        calculate_component(40.0, "g6", Role.SHAFT),
    )
    if fit.fit_type != FitType.CLEARANCE or (fit.max_clearance_um, fit.min_clearance_um) != (50, 9):
        issues.append(
            ValidationIssue(
                "error",
                "spot-check fit H7/g6@40mm mismatch "
                f"(type={fit.fit_type.value} max={fit.max_clearance_um} min={fit.min_clearance_um})",
            )
        )

    return issues


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--spot-check",
        action="store_true",
        help="Run a few deterministic spot-check calculations",
    )
    args = parser.parse_args()

    issues = validate_tables()
    if args.spot_check:
        issues.extend(run_spot_checks())

    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    print(
        f"ISO286 tables: it_grades={len(it_grades.IT_VALUES)} "
        f"holes={len(deviations.SUPPORTED_HOLE_LETTERS)} "
        f"shafts={len(deviations.SUPPORTED_SHAFT_LETTERS)}"
    )
    if warnings:
        print(f"WARNINGS ({len(warnings)}):")
        for item in warnings:
            print(f"  - {item.message}")
    if errors:
        print(f"ERRORS ({len(errors)}):")
        for item in errors:
            print(f"  - {item.message}")
        return 1

    print("OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
