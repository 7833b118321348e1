"""Field checks shared by condition types."""

from __future__ import annotations

import math

from warn_gate.tiers import TierVocabulary

EMPTY_MESSAGE = "Cannot be empty"
NOT_DECIMAL_MESSAGE = "Not a valid decimal number"
NOT_INTEGER_MESSAGE = "Not a valid integer"
NEGATIVE_MESSAGE = "The provided value must be zero or greater"


def check_non_negative_decimal(value: str, tiers: TierVocabulary) -> str | None:
    """Accept finite decimal numbers that are zero or greater."""
    _ = tiers
    if not value.strip():
        return EMPTY_MESSAGE
    parsed = _parse_float(value)
    if parsed is None:
        return NOT_DECIMAL_MESSAGE
    if parsed < 0:
        return NEGATIVE_MESSAGE
    return None


def check_non_negative_integer(value: str, tiers: TierVocabulary) -> str | None:
    """Accept base-10 integers that are zero or greater."""
    _ = tiers
    if not value.strip():
        return EMPTY_MESSAGE
    try:
        parsed = int(value.strip(), 10)
    except ValueError:
        return NOT_INTEGER_MESSAGE
    if parsed < 0:
        return NEGATIVE_MESSAGE
    return None


def check_result_name(value: str, tiers: TierVocabulary) -> str | None:
    """Accept any tier name from the configured vocabulary."""
    if not value.strip():
        return EMPTY_MESSAGE
    try:
        tiers.tier(value)
    except ValueError:
        return f"Not a valid result. Expected one of: {', '.join(tiers.names)}"
    return None


def _parse_float(value: str) -> float | None:
    if "_" in value:
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed
