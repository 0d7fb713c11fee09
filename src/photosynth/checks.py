"""Boundary checks shared by the model records and parameters."""

from __future__ import annotations

from math import isnan
from numbers import Real


def require_number(value: object, name: str) -> float:
    """Reject non-numeric readings instead of coercing them."""

    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    result = float(value)
    if isnan(result):
        raise ValueError(f"{name} must not be NaN")
    return result
