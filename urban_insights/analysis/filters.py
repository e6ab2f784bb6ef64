"""Selection of records by the dashboard's filter controls."""

import random
from collections.abc import Sequence

from urban_insights.models import FilterCriteria, PropertyRecord


def apply_filters(
    records: Sequence[PropertyRecord],
    criteria: FilterCriteria | None,
) -> list[PropertyRecord]:
    """Return the records that satisfy every set criterion, in input order.

    Unset criteria do not restrict anything, so an empty ``FilterCriteria``
    returns all records. A record with a missing value never satisfies a
    criterion set on that dimension.
    """
    if criteria is None or criteria.is_empty():
        return list(records)
    return [r for r in records if _matches(r, criteria)]


def _matches(record: PropertyRecord, criteria: FilterCriteria) -> bool:
    if criteria.neighborhoods is not None and record.neighborhood not in criteria.neighborhoods:
        return False
    if criteria.property_types is not None and record.property_type not in criteria.property_types:
        return False
    if criteria.bedrooms is not None and record.bedrooms not in criteria.bedrooms:
        return False
    if criteria.price_range is not None and not _within(record.price, criteria.price_range):
        return False
    if criteria.date_range is not None and not _within(record.sale_date, criteria.date_range):
        return False
    if criteria.sqft_range is not None and not _within(record.square_footage, criteria.sqft_range):
        return False
    return True


def _within(value, bounds) -> bool:
    if value is None:
        return False
    lo, hi = bounds
    return lo <= value <= hi


def sample_records(
    records: Sequence[PropertyRecord],
    size: int,
    seed: int | None = None,
) -> list[PropertyRecord]:
    """Pick at most ``size`` records at random, for point-heavy views.

    Returns every record unchanged when there are no more than ``size``.
    """
    if size >= len(records):
        return list(records)
    return random.Random(seed).sample(list(records), max(size, 0))
