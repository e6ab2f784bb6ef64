"""Record cleaning and validation."""

import logging
import math
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime
from typing import Any

from urban_insights.config import CleaningConfig
from urban_insights.exceptions import ValidationError
from urban_insights.models import PropertyRecord

logger = logging.getLogger(__name__)


def clean(
    records: Iterable[PropertyRecord],
    config: CleaningConfig | None = None,
) -> list[PropertyRecord]:
    """Drop invalid records and normalize the rest.

    A record is dropped when price, square footage or neighborhood is
    missing, when price or square footage falls outside the configured
    bounds, or when a field cannot be coerced to its canonical type.
    Surviving records get canonical types and freshly computed derived
    fields. The input is not modified and ``clean`` is idempotent.

    Parameters
    ----------
    records : Iterable[PropertyRecord]
        Records to clean.
    config : CleaningConfig | None
        Acceptance bounds. Defaults to ``CleaningConfig()``.

    Returns
    -------
    list[PropertyRecord]
        Valid, normalized records in input order.
    """
    config = config or CleaningConfig()
    cleaned: list[PropertyRecord] = []
    total = 0

    for record in records:
        total += 1
        try:
            cleaned.append(_clean_one(record, config))
        except ValidationError as e:
            logger.debug("Dropping invalid record: %s", e)

    dropped = total - len(cleaned)
    if dropped:
        logger.info(
            "Cleaning dropped %d of %d records",
            dropped,
            total,
            extra={"dropped": dropped, "total": total},
        )
    return cleaned


def _clean_one(record: PropertyRecord, config: CleaningConfig) -> PropertyRecord:
    price = _to_float(record, "price")
    sqft = _to_int(record, "square_footage")
    if price is None:
        raise ValidationError(record.id, "missing price")
    if sqft is None:
        raise ValidationError(record.id, "missing square_footage")
    if not record.neighborhood:
        raise ValidationError(record.id, "missing neighborhood")

    if not config.min_price <= price <= config.max_price:
        raise ValidationError(record.id, f"price {price} outside [{config.min_price}, {config.max_price}]")
    if not config.min_sqft <= sqft <= config.max_sqft:
        raise ValidationError(
            record.id, f"square_footage {sqft} outside [{config.min_sqft}, {config.max_sqft}]"
        )

    normalized = replace(
        record,
        neighborhood=str(record.neighborhood),
        property_type=str(record.property_type) if record.property_type is not None else None,
        sale_date=_to_date(record),
        price=price,
        square_footage=sqft,
        bedrooms=_to_int(record, "bedrooms"),
        bathrooms=_to_float(record, "bathrooms"),
        age_years=_to_int(record, "age_years"),
        parking_spaces=_to_int(record, "parking_spaces"),
        latitude=_to_float(record, "latitude"),
        longitude=_to_float(record, "longitude"),
    )
    return normalized.with_derived_fields()


def _to_float(record: PropertyRecord, name: str) -> float | None:
    value: Any = getattr(record, name)
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(record.id, f"{name} is not numeric: {value!r}") from e
    if math.isnan(result):
        return None
    if not math.isfinite(result):
        raise ValidationError(record.id, f"{name} is not finite: {value!r}")
    return result


def _to_int(record: PropertyRecord, name: str) -> int | None:
    result = _to_float(record, name)
    return None if result is None else int(round(result))


def _to_date(record: PropertyRecord) -> date | None:
    value: Any = record.sale_date
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise ValidationError(record.id, f"sale_date is not a date: {value!r}") from e
