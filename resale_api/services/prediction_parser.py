"""Turn raw model text into a validated prediction dict.

Everything here is pure: no I/O, no settings, no logging, so each step can
be tested without a network call.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Dict, List

from ..errors import IncompletePrediction, MalformedUpstreamJSON
from ..schemas import CONDITION_TIERS

REQUIRED_FIELDS = ("productTitle", "valueRange")

# ```json ... ``` (language tag optional), spanning the whole text
_FENCE_RE = re.compile(r"^```[ \t]*[A-Za-z0-9_-]*[ \t]*\n?(.*?)\n?[ \t]*```$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove one markdown code fence wrapped around the whole text, if any."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"{literal} overflows a float")
    return value


def parse_prediction_text(text: str) -> Any:
    """Fence-strip and JSON-decode model output. Raises MalformedUpstreamJSON.

    NaN, Infinity and overflowing numbers are rejected: they are not JSON and
    could not be rendered back to the caller.
    """
    try:
        return json.loads(
            strip_code_fences(text),
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except ValueError as exc:
        raise MalformedUpstreamJSON(raw=text) from exc


def missing_fields(prediction: Any) -> List[str]:
    """Required fields that are absent, not strings, or blank."""
    if not isinstance(prediction, dict):
        return list(REQUIRED_FIELDS)
    missing = []
    for field in REQUIRED_FIELDS:
        value = prediction.get(field)
        if not isinstance(value, str) or not value.strip():
            missing.append(field)
    return missing


def validate_prediction(prediction: Any) -> Dict[str, Any]:
    """Return the prediction unchanged if valid, else raise IncompletePrediction."""
    missing = missing_fields(prediction)
    if missing:
        raise IncompletePrediction(
            details=f"Missing or empty: {', '.join(missing)}",
            prediction=prediction,
        )
    return prediction


def shape_warnings(prediction: Dict[str, Any]) -> List[str]:
    """
    Soft checks on fields that are not enforced. Used for logging only;
    a prediction with warnings is still returned to the caller.
    """
    warnings = []
    for field in ("demandScore", "confidenceScore"):
        value = prediction.get(field)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            warnings.append(f"{field} is not a number")
        elif not 0 <= value <= 100:
            warnings.append(f"{field} out of 0-100 range: {value}")

    tiers = prediction.get("conditionPricing")
    if not isinstance(tiers, list):
        warnings.append("conditionPricing is not a list")
    else:
        seen = tuple(t.get("tier") if isinstance(t, dict) else None for t in tiers)
        if seen != CONDITION_TIERS:
            warnings.append(f"conditionPricing tiers are {list(seen)}, expected {list(CONDITION_TIERS)}")
    return warnings
