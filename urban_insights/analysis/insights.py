"""Single-value highlights and market-level statistics."""

import logging
from collections.abc import Sequence
from typing import Any

import pandas as pd

from urban_insights.analysis.frame import nullable, records_to_frame
from urban_insights.config import DEFAULT_NEIGHBORHOOD_WEIGHTS, DEFAULT_PROPERTY_TYPE_WEIGHTS
from urban_insights.exceptions import InsufficientDataError
from urban_insights.models import (
    Insights,
    MarketStats,
    NeighborhoodLocation,
    PropertyRecord,
    Season,
)

logger = logging.getLogger(__name__)

CORRELATION_COLUMNS = [
    "price",
    "square_footage",
    "bedrooms",
    "bathrooms",
    "age_years",
    "parking_spaces",
]


def extract_insights(
    records: Sequence[PropertyRecord],
    neighborhoods: Sequence[str] | None = None,
    property_types: Sequence[str] | None = None,
    best_value_min_count: int = 20,
) -> Insights:
    """Derive the dashboard highlights of a record set.

    Ties are broken by catalog order (``neighborhoods``,
    ``property_types``; default catalogs when omitted) and by
    Winter, Spring, Summer, Fall for seasons. The best-value neighborhood is
    the lowest average price per square foot among neighborhoods with at
    least ``best_value_min_count`` sales, or None if none qualifies.

    Raises
    ------
    InsufficientDataError
        If ``records`` is empty.
    """
    if not records:
        raise InsufficientDataError("Cannot extract insights from an empty record set")

    neighborhoods = list(neighborhoods or DEFAULT_NEIGHBORHOOD_WEIGHTS)
    property_types = list(property_types or DEFAULT_PROPERTY_TYPE_WEIGHTS)

    frame = records_to_frame(records)
    price = frame["price"]

    by_neighborhood = _in_catalog_order(
        frame.groupby("neighborhood").agg(
            avg_price=("price", "mean"),
            count=("id", "size"),
            avg_price_per_sqft=("price_per_sqft", "mean"),
        ),
        neighborhoods,
    )
    type_counts = _in_catalog_order(frame.groupby("property_type").size(), property_types)
    season_counts = _in_catalog_order(frame.groupby("season").size(), [s.value for s in Season])

    expensive, expensive_price = _arg_extreme(by_neighborhood["avg_price"], largest=True)
    affordable, affordable_price = _arg_extreme(by_neighborhood["avg_price"], largest=False)
    active, active_count = _arg_extreme(by_neighborhood["count"], largest=True)
    popular, popular_count = _arg_extreme(type_counts, largest=True)
    season, season_count = _arg_extreme(season_counts, largest=True)

    qualified = by_neighborhood[by_neighborhood["count"] >= best_value_min_count]
    best_value, best_value_ppsf = _arg_extreme(qualified["avg_price_per_sqft"], largest=False)
    if best_value is None:
        logger.debug("No neighborhood has %d or more sales for best value", best_value_min_count)

    return Insights(
        total_count=len(frame),
        avg_price=nullable(price.mean()),
        median_price=nullable(price.median()),
        price_range=(float(price.min()), float(price.max())) if price.notna().any() else None,
        most_expensive_neighborhood=expensive,
        most_expensive_avg_price=expensive_price,
        most_affordable_neighborhood=affordable,
        most_affordable_avg_price=affordable_price,
        most_active_neighborhood=active,
        most_active_count=_as_count(active_count),
        most_popular_property_type=popular,
        most_popular_count=_as_count(popular_count),
        busiest_season=Season(season) if season is not None else None,
        busiest_season_count=_as_count(season_count),
        avg_price_per_sqft=nullable(frame["price_per_sqft"].mean()),
        best_value_neighborhood=best_value,
        best_value_price_per_sqft=best_value_ppsf,
    )


def market_stats(records: Sequence[PropertyRecord]) -> MarketStats:
    """Compare the latest sale year with the year before it.

    Changes are percentages; they are 0 when the previous year has no
    sales (volume) or no positive average price (price).
    """
    if not records:
        raise InsufficientDataError("Cannot compute market stats from an empty record set")

    frame = records_to_frame(records)
    years = frame["year"].dropna()
    if years.empty:
        raise InsufficientDataError("No dated records to compute market stats from")

    current_year = int(years.max())
    previous_year = current_year - 1
    current = frame.loc[frame["year"] == current_year, "price"]
    previous = frame.loc[frame["year"] == previous_year, "price"]

    avg_current = nullable(current.mean())
    avg_previous = nullable(previous.mean())

    volume_change = 0.0
    if len(previous) > 0:
        volume_change = (len(current) - len(previous)) / len(previous) * 100

    price_change = 0.0
    if avg_previous and avg_previous > 0 and avg_current is not None:
        price_change = (avg_current - avg_previous) / avg_previous * 100

    return MarketStats(
        current_year=current_year,
        previous_year=previous_year,
        total_properties_current=len(current),
        total_properties_previous=len(previous),
        avg_price_current=avg_current,
        avg_price_previous=avg_previous,
        median_price_current=nullable(current.median()),
        median_price_previous=nullable(previous.median()),
        yoy_volume_change=volume_change,
        yoy_price_change=price_change,
    )


def correlation_matrix(records: Sequence[PropertyRecord]) -> pd.DataFrame:
    """Pearson correlations between the numeric attributes over complete rows."""
    frame = records_to_frame(records)[CORRELATION_COLUMNS]
    return frame.dropna().corr()


def neighborhood_map_summary(
    records: Sequence[PropertyRecord],
    neighborhoods: Sequence[str] | None = None,
) -> list[NeighborhoodLocation]:
    """Per-neighborhood markers for the map layer, in catalog order."""
    if not records:
        return []

    frame = records_to_frame(records)
    summary = _in_catalog_order(
        frame.groupby("neighborhood").agg(
            count=("id", "size"),
            avg_price=("price", "mean"),
            avg_price_per_sqft=("price_per_sqft", "mean"),
            avg_latitude=("latitude", "mean"),
            avg_longitude=("longitude", "mean"),
        ),
        list(neighborhoods or DEFAULT_NEIGHBORHOOD_WEIGHTS),
    )
    return [
        NeighborhoodLocation(
            neighborhood=str(name),
            count=int(row["count"]),
            avg_price=nullable(row["avg_price"]),
            avg_price_per_sqft=nullable(row["avg_price_per_sqft"]),
            avg_latitude=nullable(row["avg_latitude"]),
            avg_longitude=nullable(row["avg_longitude"]),
        )
        for name, row in summary.iterrows()
    ]


def _in_catalog_order(summary, catalog: Sequence) -> pd.DataFrame | pd.Series:
    """Reorder a group summary by catalog position; unknown labels go last."""
    present = set(summary.index)
    order = [label for label in catalog if label in present]
    known = set(order)
    order += sorted((label for label in summary.index if label not in known), key=str)
    return summary.reindex(order)


def _arg_extreme(series: pd.Series, largest: bool) -> tuple[Any, float | None]:
    """First label holding the max (or min) value, with that value."""
    values = series.dropna()
    if values.empty:
        return None, None
    label = values.idxmax() if largest else values.idxmin()
    return label, float(values[label])


def _as_count(value: float | None) -> int | None:
    return None if value is None else int(value)
