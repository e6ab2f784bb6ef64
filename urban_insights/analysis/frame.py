"""Conversion of record sequences into pandas frames."""

from collections.abc import Sequence
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd

from urban_insights.models import RECORD_FIELDS, PropertyRecord

NUMERIC_COLUMNS = [
    "price",
    "square_footage",
    "bedrooms",
    "bathrooms",
    "age_years",
    "parking_spaces",
    "latitude",
    "longitude",
    "price_per_sqft",
    "year",
    "month",
    "quarter",
]

# Enum members become their plain values so group labels are ordinary strings
ENUM_COLUMNS = ["season", "age_category"]


def records_to_frame(records: Sequence[PropertyRecord]) -> pd.DataFrame:
    """Build a frame with one row per record and one column per field.

    Numeric columns are float so missing values become NaN and enum
    columns hold their values; every other column keeps the Python objects
    of the records.
    """
    frame = pd.DataFrame(
        [[getattr(r, name) for name in RECORD_FIELDS] for r in records],
        columns=list(RECORD_FIELDS),
    )
    for column in NUMERIC_COLUMNS:
        frame[column] = pd.to_numeric(frame[column], errors="coerce").astype(float)
    for column in ENUM_COLUMNS:
        frame[column] = frame[column].map(lambda v: v.value if isinstance(v, Enum) else v)
    return frame


def nullable(value: Any) -> float | None:
    """Turn a pandas scalar into a float, or None when it is missing."""
    if value is None or pd.isna(value):
        return None
    return float(value)


def plain_key(value: Any) -> Any:
    """Turn a pandas group label into a plain Python value."""
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, (float, np.floating)):
        if np.isnan(value):
            return None
        return int(value) if float(value).is_integer() else float(value)
    if isinstance(value, np.integer):
        return int(value)
    return value
