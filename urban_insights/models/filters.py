"""Filter criteria driven by the dashboard controls."""

from dataclasses import dataclass, fields
from datetime import date


@dataclass(frozen=True)
class FilterCriteria:
    """Current UI selection.

    Every field is optional; ``None`` means no restriction on that
    dimension. Ranges are inclusive on both ends.
    """

    neighborhoods: frozenset[str] | None = None
    property_types: frozenset[str] | None = None
    price_range: tuple[float, float] | None = None
    date_range: tuple[date, date] | None = None
    bedrooms: frozenset[int] | None = None
    sqft_range: tuple[float, float] | None = None

    def is_empty(self) -> bool:
        """Return True when no dimension is restricted."""
        return all(getattr(self, f.name) is None for f in fields(self))
