"""Property sale record for the housing dashboard."""

from dataclasses import dataclass, fields, replace
from datetime import date

from urban_insights.models.enums import AgeCategory, Season

# (inclusive upper age, category); anything older is HISTORIC
AGE_BREAKPOINTS: tuple[tuple[int, AgeCategory], ...] = (
    (5, AgeCategory.NEW),
    (15, AgeCategory.MODERN),
    (30, AgeCategory.ESTABLISHED),
    (50, AgeCategory.MATURE),
)

SEASON_BY_MONTH: dict[int, Season] = {
    12: Season.WINTER,
    1: Season.WINTER,
    2: Season.WINTER,
    3: Season.SPRING,
    4: Season.SPRING,
    5: Season.SPRING,
    6: Season.SUMMER,
    7: Season.SUMMER,
    8: Season.SUMMER,
    9: Season.FALL,
    10: Season.FALL,
    11: Season.FALL,
}


def season_for_month(month: int) -> Season:
    """Return the meteorological season of a calendar month."""
    return SEASON_BY_MONTH[month]


def age_category_for(age_years: int) -> AgeCategory:
    """Bucket a building age into its age category."""
    for upper, category in AGE_BREAKPOINTS:
        if age_years <= upper:
            return category
    return AgeCategory.HISTORIC


@dataclass(frozen=True)
class PropertyRecord:
    """One housing transaction.

    Field order is the column order of the CSV export. The fields after
    ``longitude`` are derived and are only meaningful after
    :meth:`with_derived_fields` has run.
    """

    id: str
    neighborhood: str | None
    property_type: str | None
    sale_date: date | None
    price: float | None
    square_footage: int | None
    bedrooms: int | None
    bathrooms: float | None
    age_years: int | None
    parking_spaces: int | None
    latitude: float | None
    longitude: float | None
    price_per_sqft: float | None = None
    year: int | None = None
    month: int | None = None
    quarter: int | None = None
    season: Season | None = None
    age_category: AgeCategory | None = None

    def with_derived_fields(self) -> "PropertyRecord":
        """Return a copy with every derived field recomputed from current values."""
        price_per_sqft = None
        if self.price is not None and self.square_footage:
            price_per_sqft = round(self.price / self.square_footage, 2)

        year = month = quarter = season = None
        if self.sale_date is not None:
            year = self.sale_date.year
            month = self.sale_date.month
            quarter = (month - 1) // 3 + 1
            season = season_for_month(month)

        age_category = age_category_for(self.age_years) if self.age_years is not None else None

        return replace(
            self,
            price_per_sqft=price_per_sqft,
            year=year,
            month=month,
            quarter=quarter,
            season=season,
            age_category=age_category,
        )


RECORD_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(PropertyRecord))
