from __future__ import annotations

from typing import Any

import pandas as pd


def _normalize_scalar(value: Any) -> Any | None:
    """
    Common pre-processing for provider values:
    - None → None
    - pandas NA / NaN → None
    - numpy scalar etc. → .item()
    """
    if value is None:
        return None

    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        # pd.isna returns arrays for list-likes; treat those as values
        pass

    if hasattr(value, "item"):
        try:
            value = value.item()
        except (TypeError, ValueError):
            pass

    return value


def as_float(value: Any) -> float | None:
    """Convert a provider value to float, or None when that makes no sense."""
    value = _normalize_scalar(value)
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip().replace(",", ".")

    try:
        return float(value)
    except (TypeError, ValueError):
        return None
