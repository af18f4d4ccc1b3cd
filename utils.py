"""
Utility functions for Financey application
"""
from __future__ import annotations
import os
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

CENT = Decimal("0.01")


def safe_float(x: str, default: Optional[float] = 0.0) -> Optional[float]:
    """Convert string to float safely, returning default on error"""
    try:
        return float(x)
    except (TypeError, ValueError):
        return default


def round_money(value: float) -> float:
    """
    Round to cents, halves away from zero (12.345 -> 12.35, -0.125 -> -0.13).
    Goes through the shortest repr so binary noise does not flip a half.
    """
    try:
        return float(Decimal(repr(float(value))).quantize(CENT, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # nan / inf have no cent representation
        return float(value)


def format_money(value: Optional[float]) -> str:
    """Format an amount for display; unset costs show as a dash"""
    if value is None:
        return "-"
    return f"{value:.2f}"


def app_dir() -> str:
    """
    Get application data directory: $FINANCEY_HOME or
    ~/Library/Application Support/Financey.
    Creates directory if it doesn't exist.
    """
    path = os.getenv("FINANCEY_HOME")
    if not path:
        base = os.path.expanduser("~/Library/Application Support")
        path = os.path.join(base, "Financey")
    os.makedirs(path, exist_ok=True)
    return path
