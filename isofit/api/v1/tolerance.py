"""Tolerance and fits calculation API endpoints (ISO 286)."""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from isofit.api.dependencies import get_api_key
from isofit.core.config import get_settings
from isofit.core.errors import ToleranceError
from isofit.core.knowledge.tolerance import (
    ISO_STANDARD,
    SIZE_BOUNDARIES,
    SUPPORTED_HOLE_LETTERS,
    SUPPORTED_IT_GRADES,
    SUPPORTED_LANGUAGES,
    SUPPORTED_SHAFT_LETTERS,
    CalculationMode,
    CalculationResult,
    FitType,
    ToleranceResult,
    advise_fit,
    calculate_tolerance,
    error_message,
    get_preferred_fits,
)
from isofit.core.knowledge.tolerance.it_grades import MAX_NOMINAL_SIZE_MM, MIN_NOMINAL_SIZE_MM
from isofit.core.knowledge.tolerance.localization import advice_text, fit_type_name, normalize_language
from isofit.utils.metrics import (
    tolerance_advisor_requests_total,
    tolerance_calculation_duration_seconds,
    tolerance_calculations_total,
    tolerance_errors_total,
)

logger = logging.getLogger(__name__)
router = APIRouter()


class CalculateRequest(BaseModel):
    nominal_size_mm: float = Field(..., description="Nominal size in mm, 0 < size <= 500")
    mode: CalculationMode = Field(default=CalculationMode.FIT, description="SINGLE or FIT")
    grade1: str = Field(..., description="Hole class in FIT mode (e.g. H7); any class in SINGLE mode")
    grade2: Optional[str] = Field(default=None, description="Shaft class, required in FIT mode (e.g. g6)")
    language: Optional[str] = Field(default=None, description="Output language (en, de)")


class ComponentResponse(BaseModel):
    grade: str = Field(..., description="Tolerance class label (e.g. H7, g6)")
    role: str = Field(..., description="hole or shaft")
    upper_deviation_um: int = Field(..., description="ES/es in micrometers")
    lower_deviation_um: int = Field(..., description="EI/ei in micrometers")
    max_size_mm: float
    min_size_mm: float
    it_value_um: int = Field(..., description="Standard tolerance of the grade (um)")


class FitResponse(BaseModel):
    fit_type: str = Field(..., description="Clearance/Transition/Interference")
    fit_type_name: str = Field(..., description="Localized fit type")
    max_clearance_um: int
    min_clearance_um: int
    max_clearance: Optional[int] = None
    min_clearance: Optional[int] = None
    max_interference: Optional[int] = None
    min_interference: Optional[int] = None
    description: str


class CalculationResponse(BaseModel):
    nominal_size_mm: float
    mode: str
    hole: Optional[ComponentResponse] = None
    shaft: Optional[ComponentResponse] = None
    fit: Optional[FitResponse] = None
    recommendation_key: str
    recommendation: str
    iso_standard: str = Field(default=ISO_STANDARD, description="Reference standard")
    language: str
    text_summary: str


def _component_response(component: Optional[ToleranceResult]) -> Optional[ComponentResponse]:
    if component is None:
        return None
    return ComponentResponse(
        grade=component.grade,
        role=component.role.value,
        upper_deviation_um=component.upper_deviation_um,
        lower_deviation_um=component.lower_deviation_um,
        max_size_mm=component.max_size_mm,
        min_size_mm=component.min_size_mm,
        it_value_um=component.it_value_um,
    )


def _calculation_response(result: CalculationResult) -> CalculationResponse:
    fit = None
    if result.fit is not None:
        fit = FitResponse(
            fit_type=result.fit.fit_type.value,
            fit_type_name=fit_type_name(result.fit.fit_type.value, result.language),
            max_clearance_um=result.fit.max_clearance_um,
            min_clearance_um=result.fit.min_clearance_um,
            max_clearance=result.fit.max_clearance,
            min_clearance=result.fit.min_clearance,
            max_interference=result.fit.max_interference,
            min_interference=result.fit.min_interference,
            description=result.fit.description,
        )
    return CalculationResponse(
        nominal_size_mm=result.nominal_size_mm,
        mode=result.mode.value,
        hole=_component_response(result.hole),
        shaft=_component_response(result.shaft),
        fit=fit,
        recommendation_key=result.recommendation_key,
        recommendation=result.recommendation,
        iso_standard=result.iso_standard,
        language=result.language,
        text_summary=result.text_summary,
    )


def _error_detail(exc: ToleranceError, language: str) -> Dict[str, Any]:
    detail = exc.to_dict()
    value = detail.get("value")
    # non-finite floats are not valid JSON
    if isinstance(value, float) and not math.isfinite(value):
        detail["value"] = str(value)
    detail["message"] = error_message(exc, language)
    return detail


@router.post("/calculate", response_model=CalculationResponse)
async def calculate(
    payload: CalculateRequest,
    api_key: str = Depends(get_api_key),
) -> CalculationResponse:
    _ = api_key
    language = normalize_language(payload.language or get_settings().DEFAULT_LANGUAGE)
    log_fields = {
        "mode": payload.mode.value,
        "nominal_size": payload.nominal_size_mm,
        "hole_grade": payload.grade1,
        "shaft_grade": payload.grade2,
        "language": language,
    }

    start = time.perf_counter()
    try:
        result = calculate_tolerance(
            payload.nominal_size_mm,
            payload.mode,
            payload.grade1,
            payload.grade2,
            language=language,
        )
    except ToleranceError as exc:
        tolerance_calculations_total.labels(mode=payload.mode.value, status="error").inc()
        tolerance_errors_total.labels(code=exc.code.value).inc()
        logger.warning(
            "tolerance calculation rejected: %s",
            exc,
            extra={**log_fields, "error_code": exc.code.value},
        )
        raise HTTPException(status_code=400, detail=_error_detail(exc, language))

    elapsed = time.perf_counter() - start
    tolerance_calculation_duration_seconds.observe(elapsed)
    tolerance_calculations_total.labels(mode=payload.mode.value, status="success").inc()
    logger.info(
        "tolerance calculated",
        extra={
            **log_fields,
            "fit_type": result.fit.fit_type.value if result.fit is not None else None,
            "latency_ms": round(elapsed * 1000, 3),
        },
    )
    return _calculation_response(result)


class VocabularyResponse(BaseModel):
    it_grades: List[str]
    hole_letters: List[str]
    shaft_letters: List[str]
    modes: List[str]
    languages: List[str]
    size_boundaries_mm: List[float] = Field(..., description="Upper boundaries of the size ranges")
    min_nominal_size_mm: float = Field(..., description="Exclusive lower bound")
    max_nominal_size_mm: float = Field(..., description="Inclusive upper bound")


@router.get("/vocabulary", response_model=VocabularyResponse)
async def vocabulary(api_key: str = Depends(get_api_key)) -> VocabularyResponse:
    _ = api_key
    return VocabularyResponse(
        it_grades=list(SUPPORTED_IT_GRADES),
        hole_letters=list(SUPPORTED_HOLE_LETTERS),
        shaft_letters=list(SUPPORTED_SHAFT_LETTERS),
        modes=[mode.value for mode in CalculationMode],
        languages=list(SUPPORTED_LANGUAGES),
        size_boundaries_mm=[float(b) for b in SIZE_BOUNDARIES],
        min_nominal_size_mm=MIN_NOMINAL_SIZE_MM,
        max_nominal_size_mm=MAX_NOMINAL_SIZE_MM,
    )


class PreferredFitResponse(BaseModel):
    code: str
    category: str
    description: str
    fit_type: str


@router.get("/preferred-fits", response_model=List[PreferredFitResponse])
async def preferred_fits(
    fit_type: Optional[FitType] = Query(default=None, description="Filter by fit type"),
    api_key: str = Depends(get_api_key),
) -> List[PreferredFitResponse]:
    _ = api_key
    return [
        PreferredFitResponse(
            code=fit.code,
            category=fit.category,
            description=fit.description,
            fit_type=fit.fit_type.value,
        )
        for fit in get_preferred_fits(fit_type)
    ]


class AdviceResponse(BaseModel):
    code: str = Field(..., description="Fit code in the requested system")
    hole_basis_code: str
    system: str
    fit_type: str
    fit_type_name: str
    explanation: str
    applications: str
    assembly: str
    language: str


@router.get("/advisor", response_model=AdviceResponse)
async def advisor(
    movement: str = Query(..., description="moving or fixed"),
    condition: str = Query(..., description="e.g. running, precision, permanent"),
    system: str = Query(default="general", description="general, hole or shaft"),
    language: Optional[str] = Query(default=None, description="Output language (en, de)"),
    api_key: str = Depends(get_api_key),
) -> AdviceResponse:
    _ = api_key
    language = normalize_language(language or get_settings().DEFAULT_LANGUAGE)
    try:
        advice = advise_fit(movement.strip().lower(), condition.strip().lower(), system.strip().lower())
    except ValueError as exc:
        tolerance_advisor_requests_total.labels(status="error").inc()
        logger.warning("fit advisor rejected input: %s", exc, extra={"language": language})
        raise HTTPException(status_code=400, detail=str(exc))

    tolerance_advisor_requests_total.labels(status="success").inc()
    texts = advice_text(advice.hole_basis_code, language)
    return AdviceResponse(
        code=advice.code,
        hole_basis_code=advice.hole_basis_code,
        system=advice.system.value,
        fit_type=advice.fit_type.value,
        fit_type_name=fit_type_name(advice.fit_type.value, language),
        explanation=texts["explanation"],
        applications=texts["applications"],
        assembly=texts["assembly"],
        language=language,
    )


__all__ = ["router"]
