#!/usr/bin/env python3
"""Calculate an ISO 286 tolerance or fit from the command line.

Examples:
    python scripts/calculate_tolerance.py 40 H7 g6
    python scripts/calculate_tolerance.py 40 g6 --mode SINGLE
    python scripts/calculate_tolerance.py 40 H7 p6 --language de --json
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from isofit.core.errors import ToleranceError  # noqa: E402
from isofit.core.knowledge.tolerance import (  # noqa: E402
    SUPPORTED_LANGUAGES,
    CalculationMode,
    calculate_tolerance,
    error_message,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ISO 286 tolerance and fit calculator")
    parser.add_argument("nominal_size", type=float, help="Nominal size in mm (0 < size <= 500)")
    parser.add_argument("grade1", help="Hole class in FIT mode (e.g. H7); any class in SINGLE mode")
    parser.add_argument("grade2", nargs="?", default=None, help="Shaft class for FIT mode (e.g. g6)")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in CalculationMode],
        default=None,
        help="Defaults to FIT when a second grade is given, SINGLE otherwise",
    )
    parser.add_argument(
        "--language",
        choices=list(SUPPORTED_LANGUAGES),
        default="en",
        help="Output language",
    )
    parser.add_argument("--json", action="store_true", help="Print the structured result as JSON")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    mode = args.mode or (CalculationMode.FIT.value if args.grade2 else CalculationMode.SINGLE.value)
    try:
        result = calculate_tolerance(
            args.nominal_size,
            CalculationMode(mode),
            args.grade1,
            args.grade2,
            language=args.language,
        )
    except ToleranceError as exc:
        if args.json:
            detail = exc.to_dict()
            detail["message"] = error_message(exc, args.language)
            print(json.dumps({"error": detail}, ensure_ascii=False, indent=2, default=str))
        else:
            print(f"ERROR [{exc.code.value}]: {error_message(exc, args.language)}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        print(result.text_summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
