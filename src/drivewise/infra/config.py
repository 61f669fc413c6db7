from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation

from drivewise.domain.affordability import (
    DEFAULT_BRACKET_OVERLAP_THRESHOLD,
    DEFAULT_NET_INCOME_RATIO,
)

NET_INCOME_RATIO_ENV = "DRIVEWISE_NET_INCOME_RATIO"
BRACKET_OVERLAP_THRESHOLD_ENV = "DRIVEWISE_BRACKET_OVERLAP_THRESHOLD"


def _decimal_env(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(name)

    if raw is None or not raw.strip():
        return default

    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise RuntimeError(f"{name} must be a decimal number, got {raw!r}")

    if not value.is_finite():
        raise RuntimeError(f"{name} must be a finite decimal number, got {raw!r}")

    return value


def net_income_ratio() -> Decimal:
    """Share of gross income treated as net income. Defaults to 1 (no tax adjustment)."""
    value = _decimal_env(NET_INCOME_RATIO_ENV, DEFAULT_NET_INCOME_RATIO)

    if not (0 < value <= 1):
        raise RuntimeError(f"{NET_INCOME_RATIO_ENV} must be in (0, 1]")

    return value


def bracket_overlap_threshold() -> Decimal:
    value = _decimal_env(BRACKET_OVERLAP_THRESHOLD_ENV, DEFAULT_BRACKET_OVERLAP_THRESHOLD)

    if not (0 <= value <= 1):
        raise RuntimeError(f"{BRACKET_OVERLAP_THRESHOLD_ENV} must be in [0, 1]")

    return value
