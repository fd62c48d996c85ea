"""
Localized text for tolerance calculation results.

The engine produces language-neutral values (deviations, fit type tags,
recommendation keys). This module turns them into human-readable text for
a language. Unknown languages and missing keys fall back to English.
"""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from isofit.core.errors import ToleranceError

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        # fit type names
        "fit_type.Clearance": "Clearance",
        "fit_type.Transition": "Transition",
        "fit_type.Interference": "Interference",
        # fit descriptions
        "fit.Clearance": "Always a gap. Max gap: {max_clearance}µm, Min gap: {min_clearance}µm.",
        "fit.Interference": (
            "Always tight. Max interference: {max_interference}µm, "
            "Min interference: {min_interference}µm."
        ),
        "fit.Transition": (
            "Can be loose or tight. Max clearance: {max_clearance}µm, "
            "Max interference: {max_interference}µm."
        ),
        # recommendations for hole-basis pairs, keyed by shaft letter
        "pair.d": "Free Running Fit - Large clearance for loose pulleys and high speeds.",
        "pair.e": "Loose Running Fit - Noticeable clearance.",
        "pair.f": "Running Fit - Good for lubrication.",
        "pair.g": "Precision Sliding Fit - Parts move/slide accurately.",
        "pair.h": "Locational Clearance Fit - Parts assemble freely.",
        "pair.k": (
            "Locational Transition Fit - Accurate location, compromise between "
            "clearance and interference."
        ),
        "pair.m": "Transition Fit - Tight, possible slight interference. Assemble with mallet.",
        "pair.n": "Transition/Interference - Fixed location.",
        "pair.p": "Locational Interference Fit - Press fit for rigid location.",
        "pair.r": "Medium Press Fit - Permanent assembly for load transmission.",
        "pair.s": "Medium Drive Fit - Permanent assembly.",
        # generic recommendations by fit type
        "type.Clearance": "Parts will slide or run freely.",
        "type.Interference": "Parts require force or thermal expansion to assemble.",
        "type.Transition": "Parts may slide or stick; requires careful assembly.",
        "default": "Standard ISO 286 tolerance zone.",
        # summary
        "summary.nominal": "Nominal Size: {nominal} mm",
        "summary.hole": "Hole [{grade}]:",
        "summary.shaft": "Shaft [{grade}]:",
        "summary.upper_hole": "- Upper dev (ES): {value} µm",
        "summary.lower_hole": "- Lower dev (EI): {value} µm",
        "summary.upper_shaft": "- Upper dev (es): {value} µm",
        "summary.lower_shaft": "- Lower dev (ei): {value} µm",
        "summary.limits": "- Limits: {min_size} - {max_size} mm",
        "summary.fit": "Fit Result: {fit_type}",
        "summary.recommendation": "Recommendation: {text}",
        # input fields
        "field.nominal_size": "nominal size",
        "field.grade": "grade",
        "field.hole": "hole",
        "field.shaft": "shaft",
        # errors
        "error.OUT_OF_RANGE": "Nominal size {value} mm is outside the supported range (0-500 mm).",
        "error.INVALID_FORMAT": (
            "Invalid {field} grade format: {value}. "
            "Expected letters followed by a number (e.g. H7, g6)."
        ),
        "error.UNSUPPORTED_GRADE": "Unsupported IT grade for {field}: {value}. Supported grades: 5-11.",
        "error.UNSUPPORTED_LETTER": "Unsupported {field} deviation letter: {value}.",
        "error.MISSING_GRADE": "A {field} grade is required in fit mode.",
    },
    "de": {
        "fit_type.Clearance": "Spielpassung",
        "fit_type.Transition": "Übergangspassung",
        "fit_type.Interference": "Übermaßpassung",
        "fit.Clearance": (
            "Immer Spiel. Größtspiel: {max_clearance}µm, Kleinstspiel: {min_clearance}µm."
        ),
        "fit.Interference": (
            "Immer Übermaß. Größtübermaß: {max_interference}µm, "
            "Kleinstübermaß: {min_interference}µm."
        ),
        "fit.Transition": (
            "Spiel oder Übermaß möglich. Größtspiel: {max_clearance}µm, "
            "Größtübermaß: {max_interference}µm."
        ),
        "pair.d": "Lose Laufpassung - Großes Spiel für lose Riemenscheiben und hohe Drehzahlen.",
        "pair.e": "Weite Laufpassung - Deutliches Spiel.",
        "pair.f": "Laufpassung - Gut geeignet für Schmierung.",
        "pair.g": "Präzisions-Gleitpassung - Teile gleiten genau.",
        "pair.h": "Spielpassung zur Positionierung - Teile lassen sich frei fügen.",
        "pair.k": (
            "Übergangspassung zur Positionierung - Genaue Lage, Kompromiss zwischen "
            "Spiel und Übermaß."
        ),
        "pair.m": "Übergangspassung - Fest, leichtes Übermaß möglich. Montage mit Gummihammer.",
        "pair.n": "Übergangs-/Übermaßpassung - Feste Lage.",
        "pair.p": "Presspassung zur Positionierung - Presssitz für starre Lage.",
        "pair.r": "Mittlere Presspassung - Dauerhafte Montage zur Lastübertragung.",
        "pair.s": "Mittlere Treibpassung - Dauerhafte Montage.",
        "type.Clearance": "Teile gleiten oder laufen frei.",
        "type.Interference": "Montage erfordert Kraft oder Wärmedehnung.",
        "type.Transition": "Teile können gleiten oder klemmen; sorgfältige Montage erforderlich.",
        "default": "Standard-Toleranzfeld nach ISO 286.",
        "summary.nominal": "Nennmaß: {nominal} mm",
        "summary.hole": "Bohrung [{grade}]:",
        "summary.shaft": "Welle [{grade}]:",
        "summary.upper_hole": "- Oberes Abmaß (ES): {value} µm",
        "summary.lower_hole": "- Unteres Abmaß (EI): {value} µm",
        "summary.upper_shaft": "- Oberes Abmaß (es): {value} µm",
        "summary.lower_shaft": "- Unteres Abmaß (ei): {value} µm",
        "summary.limits": "- Grenzmaße: {min_size} - {max_size} mm",
        "summary.fit": "Passung: {fit_type}",
        "summary.recommendation": "Empfehlung: {text}",
        "field.nominal_size": "Nennmaß",
        "field.grade": "Toleranzklasse",
        "field.hole": "Bohrung",
        "field.shaft": "Welle",
        "error.OUT_OF_RANGE": "Nennmaß {value} mm liegt außerhalb des Bereichs (0-500 mm).",
        "error.INVALID_FORMAT": (
            "Ungültiges Format ({field}): {value}. "
            "Erwartet Buchstaben gefolgt von einer Zahl (z. B. H7, g6)."
        ),
        "error.UNSUPPORTED_GRADE": (
            "Nicht unterstützter IT-Grad ({field}): {value}. Unterstützt: 5-11."
        ),
        "error.UNSUPPORTED_LETTER": "Nicht unterstützter Abmaßbuchstabe ({field}): {value}.",
        "error.MISSING_GRADE": "Im Passungsmodus ist eine Toleranzklasse für {field} erforderlich.",
    },
}

SUPPORTED_LANGUAGES = tuple(MESSAGES)

# Fit advisor texts, keyed by hole-basis fit code
ADVISOR_TEXT: Dict[str, Dict[str, Dict[str, str]]] = {
    "en": {
        "H9/d9": {
            "type": "Clearance (Loose)",
            "explanation": "Provides a large gap to accommodate thermal expansion, misalignment, or dirt.",
            "applications": "Idler pulleys, agricultural machinery, pivots exposed to dust.",
            "assembly": "Hand assembly. Parts slide together very easily.",
        },
        "H8/f7": {
            "type": "Clearance (Running)",
            "explanation": "Good quality running fit. Suitable for continuous rotation with lubrication.",
            "applications": "Gearbox bearings, electric motors, pumps.",
            "assembly": "Hand assembly. Perceptible play but smooth.",
        },
        "H7/g6": {
            "type": "Clearance (Sliding)",
            "explanation": (
                "Precision running fit. Smallest effective clearance for accurate "
                "guiding but free movement."
            ),
            "applications": "Sliding gears, clutch disks, machine tool spindles.",
            "assembly": "Hand assembly. Smooth sliding feel without perceptible play.",
        },
        "H7/h6": {
            "type": "Locational Clearance",
            "explanation": (
                "Line-to-line fit. Theoretically zero clearance at extremes, "
                "but usually assembles by hand."
            ),
            "applications": "Reference spigots, handwheels, pulleys requiring removal.",
            "assembly": "Hand assembly. Parts can be assembled and separated freely.",
        },
        "H7/k6": {
            "type": "Transition",
            "explanation": (
                "True transition. Can be slightly loose or slightly tight. "
                "Provides rigid location."
            ),
            "applications": "Keyed gears, pulleys, inner bearing races.",
            "assembly": "Mallet or light mechanical press needed.",
        },
        "H7/p6": {
            "type": "Interference (Press Fit)",
            "explanation": (
                "Standard interference. Parts become a single unit. "
                "Torque transmission relies on friction."
            ),
            "applications": "Bushings in housings, standard hubs on shafts.",
            "assembly": "Heavy mechanical press or thermal assembly (heating hole/freezing shaft).",
        },
        "H7/s6": {
            "type": "Interference (Heavy Drive)",
            "explanation": "Permanent assembly. Very high interference for maximum rigidity and torque.",
            "applications": "Railway wheels, heavy steel hubs, permanent couplings.",
            "assembly": "Hydraulic press or significant thermal difference required.",
        },
    },
    "de": {
        "H9/d9": {
            "type": "Spielpassung (Grob)",
            "explanation": "Bietet großes Spiel für Wärmedehnung oder Schmutz.",
            "applications": "Lose Riemenscheiben, Landmaschinen.",
            "assembly": "Handmontage. Teile gleiten sehr leicht.",
        },
        "H8/f7": {
            "type": "Laufpassung",
            "explanation": "Gute Laufqualität. Geeignet für Dauerrotation mit Schmierung.",
            "applications": "Getriebelager, Elektromotoren, Pumpen.",
            "assembly": "Handmontage. Spürbares Spiel, aber weich.",
        },
        "H7/g6": {
            "type": "Spielpassung (Fein)",
            "explanation": "Präzisionslauf. Kleinstes Spiel für genaue Führung.",
            "applications": "Schieberäder, Kupplungsscheiben, Spindeln.",
            "assembly": "Handmontage. Weiches Gleiten ohne merkliches Spiel.",
        },
        "H7/h6": {
            "type": "Positionierung (Spiel)",
            "explanation": "Null-Linie. Theoretisch kein Spiel, meist handmontierbar.",
            "applications": "Zentrierzapfen, Handräder, lösbare Riemenscheiben.",
            "assembly": "Handmontage. Teile frei fügbar.",
        },
        "H7/k6": {
            "type": "Übergangspassung",
            "explanation": "Kann leichtes Spiel oder Übermaß haben. Starre Positionierung.",
            "applications": "Zahnräder mit Passfeder, Lagerinnenringe.",
            "assembly": "Gummihammer oder leichte Presse.",
        },
        "H7/p6": {
            "type": "Presspassung",
            "explanation": "Standard-Übermaß. Teile werden eine Einheit.",
            "applications": "Buchsen in Gehäusen, Naben auf Wellen.",
            "assembly": "Schwere Presse oder thermische Montage.",
        },
        "H7/s6": {
            "type": "Treibpassung (Schwer)",
            "explanation": "Dauerhafte Montage. Sehr hohes Übermaß für maximale Steifigkeit.",
            "applications": "Eisenbahnräder, Stahlnaben, permanente Kupplungen.",
            "assembly": "Hydraulische Presse oder thermische Fügung.",
        },
    },
}


def normalize_language(language: Optional[str]) -> str:
    """Map a language tag ("de", "de-DE", "EN") to a supported catalog key."""
    if not language:
        return DEFAULT_LANGUAGE
    code = language.strip().lower().replace("_", "-").split("-", 1)[0]
    if code not in MESSAGES:
        logger.debug("Unsupported language %r, falling back to %s", language, DEFAULT_LANGUAGE)
        return DEFAULT_LANGUAGE
    return code


def get_messages(language: Optional[str] = None) -> Dict[str, str]:
    """Message catalog for a language, English entries filling any gaps."""
    messages = dict(MESSAGES[DEFAULT_LANGUAGE])
    messages.update(MESSAGES[normalize_language(language)])
    return messages


def translate(key: str, language: Optional[str] = None, **params: Any) -> str:
    catalog = MESSAGES[normalize_language(language)]
    template = catalog.get(key)
    if template is None:
        template = MESSAGES[DEFAULT_LANGUAGE][key]
    return template.format(**params)


def describe_fit(
    fit_type: str,
    max_clearance: int,
    min_clearance: int,
    language: Optional[str] = None,
) -> str:
    """Describe a fit from its tag and the signed clearance extremes (μm)."""
    return translate(
        f"fit.{fit_type}",
        language,
        max_clearance=max_clearance,
        min_clearance=min_clearance,
        max_interference=abs(min_clearance),
        min_interference=abs(max_clearance),
    )


def fit_type_name(fit_type: str, language: Optional[str] = None) -> str:
    return translate(f"fit_type.{fit_type}", language)


def recommendation_text(key: str, language: Optional[str] = None) -> str:
    return translate(key, language)


def error_message(error: "ToleranceError", language: Optional[str] = None) -> str:
    """User-facing message for an engine error, distinct per error code."""
    field = translate(f"field.{error.field}", language)
    return translate(f"error.{error.code.value}", language, field=field, value=error.value)


def advice_text(code: str, language: Optional[str] = None) -> Dict[str, str]:
    """Explanation, applications and assembly notes for an advisor fit code."""
    texts = ADVISOR_TEXT[normalize_language(language)]
    return dict(texts.get(code) or ADVISOR_TEXT[DEFAULT_LANGUAGE][code])


def _signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)


def _plain_number(value: float) -> str:
    """Positional notation of a number as entered, without a trailing '.0'."""
    return f"{Decimal(str(value)).normalize():f}"


def _component_lines(component: Any, language: Optional[str]) -> list:
    role = component.role.value
    return [
        translate(f"summary.{role}", language, grade=component.grade),
        translate(f"summary.upper_{role}", language, value=_signed(component.upper_deviation_um)),
        translate(f"summary.lower_{role}", language, value=_signed(component.lower_deviation_um)),
        translate(
            "summary.limits",
            language,
            min_size=f"{component.min_size_mm:.3f}",
            max_size=f"{component.max_size_mm:.3f}",
        ),
        "",
    ]


def format_summary(result: Any, language: Optional[str] = None) -> str:
    """
    Plain-text summary of a calculation result.

    Everything printed is derived from the structured fields of ``result``
    (nominal size, hole, shaft, fit and recommendation key).
    """
    lines = [translate("summary.nominal", language, nominal=_plain_number(result.nominal_size_mm)), ""]
    for component in (result.hole, result.shaft):
        if component is not None:
            lines.extend(_component_lines(component, language))

    fit = result.fit
    if fit is not None:
        lines.append(
            translate("summary.fit", language, fit_type=fit_type_name(fit.fit_type.value, language))
        )
        lines.append(
            describe_fit(fit.fit_type.value, fit.max_clearance_um, fit.min_clearance_um, language)
        )

    lines.append(
        translate(
            "summary.recommendation",
            language,
            text=recommendation_text(result.recommendation_key, language),
        )
    )
    return "\n".join(lines)
