"""Configuration management for urban-insights."""

import json
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from urban_insights.exceptions import ConfigurationError

# Catalog order matters: it is the tie-break order for neighborhood insights.
DEFAULT_NEIGHBORHOOD_WEIGHTS: dict[str, float] = {
    "Downtown": 0.15,
    "Riverside": 0.12,
    "Hillcrest": 0.10,
    "Oakwood": 0.08,
    "Pine Valley": 0.08,
    "Sunset District": 0.08,
    "Marina Bay": 0.07,
    "Tech Quarter": 0.07,
    "Historic District": 0.06,
    "University Area": 0.06,
    "Lakeside": 0.06,
    "Industrial Zone": 0.07,
}

DEFAULT_NEIGHBORHOOD_MULTIPLIERS: dict[str, float] = {
    "Downtown": 1.3,
    "Tech Quarter": 1.5,
    "Marina Bay": 1.4,
    "Hillcrest": 1.2,
    "Riverside": 1.1,
    "Sunset District": 1.0,
    "University Area": 0.9,
    "Oakwood": 0.95,
    "Pine Valley": 0.85,
    "Historic District": 1.1,
    "Lakeside": 0.9,
    "Industrial Zone": 0.7,
}

DEFAULT_PROPERTY_TYPE_WEIGHTS: dict[str, float] = {
    "Single Family": 0.35,
    "Condo": 0.25,
    "Townhouse": 0.20,
    "Apartment": 0.12,
    "Duplex": 0.08,
}

DEFAULT_BEDROOM_WEIGHTS: dict[int, float] = {
    1: 0.05,
    2: 0.20,
    3: 0.35,
    4: 0.25,
    5: 0.10,
    6: 0.05,
}

DEFAULT_BATHROOM_WEIGHTS: dict[float, float] = {
    1.0: 0.05,
    1.5: 0.10,
    2.0: 0.30,
    2.5: 0.20,
    3.0: 0.20,
    3.5: 0.10,
    4.0: 0.05,
}

DEFAULT_PARKING_WEIGHTS: dict[int, float] = {
    0: 0.10,
    1: 0.30,
    2: 0.45,
    3: 0.15,
}

# (label, exclusive upper bound); None marks the open-ended last bucket
DEFAULT_PRICE_CATEGORIES: tuple[tuple[str, float | None], ...] = (
    ("Budget", 300000.0),
    ("Mid-Market", 500000.0),
    ("Premium", 800000.0),
    ("Luxury", None),
)

DEFAULT_SIZE_CATEGORIES: tuple[tuple[str, float | None], ...] = (
    ("Compact", 1000.0),
    ("Standard", 1500.0),
    ("Large", 2500.0),
    ("Extra Large", None),
)


def _check_weights(name: str, weights: dict[Any, float]) -> None:
    if not weights:
        raise ConfigurationError(f"{name} must not be empty")
    if any(w < 0 for w in weights.values()):
        raise ConfigurationError(f"{name} must not contain negative weights")
    if sum(weights.values()) <= 0:
        raise ConfigurationError(f"{name} must have a positive total weight")


def _check_categories(name: str, categories: tuple[tuple[str, float | None], ...]) -> None:
    if not categories:
        raise ConfigurationError(f"{name} must not be empty")
    if categories[-1][1] is not None:
        raise ConfigurationError(f"{name} must end with an open-ended bucket")
    bounds = [bound for _, bound in categories[:-1]]
    if any(b is None for b in bounds):
        raise ConfigurationError(f"{name} may only leave the last bucket open-ended")
    if any(lo >= hi for lo, hi in zip(bounds, bounds[1:])):
        raise ConfigurationError(f"{name} bounds must be strictly increasing")


@dataclass
class GenerationConfig:
    """Parameters of the synthetic record generator."""

    neighborhood_weights: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_NEIGHBORHOOD_WEIGHTS)
    )
    neighborhood_multipliers: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_NEIGHBORHOOD_MULTIPLIERS)
    )
    property_type_weights: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_PROPERTY_TYPE_WEIGHTS)
    )
    bedroom_weights: dict[int, float] = field(default_factory=lambda: dict(DEFAULT_BEDROOM_WEIGHTS))
    bathroom_weights: dict[float, float] = field(
        default_factory=lambda: dict(DEFAULT_BATHROOM_WEIGHTS)
    )
    parking_weights: dict[int, float] = field(default_factory=lambda: dict(DEFAULT_PARKING_WEIGHTS))
    min_date: date = date(2020, 1, 1)
    max_date: date = date(2024, 12, 31)
    price_mean: float = 450000.0
    price_sd: float = 150000.0
    price_floor: float = 100000.0
    max_price: float = 2000000.0
    sqft_mean: float = 1800.0
    sqft_sd: float = 600.0
    min_sqft: int = 200
    max_sqft: int = 10000
    min_age: int = 1
    max_age: int = 100
    latitude_range: tuple[float, float] = (37.7, 37.8)
    longitude_range: tuple[float, float] = (-122.5, -122.3)
    size_price_slope: float = 50.0
    price_noise_sd: float = 10000.0

    @property
    def neighborhoods(self) -> list[str]:
        """Neighborhood catalog in declaration order."""
        return list(self.neighborhood_weights)

    @property
    def property_types(self) -> list[str]:
        """Property type catalog in declaration order."""
        return list(self.property_type_weights)

    def validate(self) -> None:
        """Check the parameters, raising ConfigurationError on the first problem."""
        if self.min_date > self.max_date:
            raise ConfigurationError(
                f"min_date {self.min_date} is after max_date {self.max_date}"
            )
        _check_weights("neighborhood_weights", self.neighborhood_weights)
        _check_weights("property_type_weights", self.property_type_weights)
        _check_weights("bedroom_weights", self.bedroom_weights)
        _check_weights("bathroom_weights", self.bathroom_weights)
        _check_weights("parking_weights", self.parking_weights)

        missing = [n for n in self.neighborhood_weights if n not in self.neighborhood_multipliers]
        if missing:
            raise ConfigurationError(f"No price multiplier for neighborhoods: {', '.join(missing)}")

        if self.price_floor <= 0 or self.price_floor > self.max_price:
            raise ConfigurationError("price_floor must be positive and not above max_price")
        if self.min_sqft <= 0 or self.min_sqft > self.max_sqft:
            raise ConfigurationError("min_sqft must be positive and not above max_sqft")
        if self.min_age < 0 or self.min_age > self.max_age:
            raise ConfigurationError("age range must be non-negative and ordered")


@dataclass
class CleaningConfig:
    """Acceptance bounds applied by the cleaner."""

    min_price: float = 50000.0
    max_price: float = 2000000.0
    min_sqft: int = 200
    max_sqft: int = 10000

    def validate(self) -> None:
        """Check that both acceptance ranges are ordered."""
        if self.min_price > self.max_price:
            raise ConfigurationError(
                f"min_price {self.min_price} is above max_price {self.max_price}"
            )
        if self.min_sqft > self.max_sqft:
            raise ConfigurationError(f"min_sqft {self.min_sqft} is above max_sqft {self.max_sqft}")


@dataclass
class SegmentConfig:
    """Bucketing and sample-size thresholds used by the aggregator and insights."""

    price_categories: tuple[tuple[str, float | None], ...] = DEFAULT_PRICE_CATEGORIES
    size_categories: tuple[tuple[str, float | None], ...] = DEFAULT_SIZE_CATEGORIES
    min_segment_count: int = 5
    best_value_min_count: int = 20

    def validate(self) -> None:
        """Check bucket boundaries."""
        _check_categories("price_categories", self.price_categories)
        _check_categories("size_categories", self.size_categories)


@dataclass
class ExportConfig:
    """CSV export configuration."""

    output_dir: Path = field(default_factory=lambda: Path("output"))
    max_rows: int = 10000


@dataclass
class DashboardConfig:
    """Main configuration for urban-insights."""

    generation: GenerationConfig = field(default_factory=GenerationConfig)
    cleaning: CleaningConfig = field(default_factory=CleaningConfig)
    segments: SegmentConfig = field(default_factory=SegmentConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    sample_size: int = 5000
    seed: int = 42
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "DashboardConfig":
        """Create config from environment variables."""
        generation = GenerationConfig()
        cleaning = CleaningConfig()
        segments = SegmentConfig()

        neighborhood_weights = _json_env("NEIGHBORHOOD_WEIGHTS")
        if neighborhood_weights is not None:
            generation.neighborhood_weights = _numbers("NEIGHBORHOOD_WEIGHTS", neighborhood_weights)

        multipliers = _json_env("NEIGHBORHOOD_MULTIPLIERS")
        if multipliers is not None:
            generation.neighborhood_multipliers = _numbers("NEIGHBORHOOD_MULTIPLIERS", multipliers)

        property_type_weights = _json_env("PROPERTY_TYPE_WEIGHTS")
        if property_type_weights is not None:
            generation.property_type_weights = _numbers(
                "PROPERTY_TYPE_WEIGHTS", property_type_weights
            )

        if os.getenv("MIN_DATE"):
            generation.min_date = _date_env("MIN_DATE")
        if os.getenv("MAX_DATE"):
            generation.max_date = _date_env("MAX_DATE")

        if os.getenv("MIN_PRICE"):
            cleaning.min_price = _number_env("MIN_PRICE")
        if os.getenv("MAX_PRICE"):
            cleaning.max_price = _number_env("MAX_PRICE")
            generation.max_price = cleaning.max_price

        price_categories = _json_env("PRICE_CATEGORIES")
        if price_categories is not None:
            segments.price_categories = _categories("PRICE_CATEGORIES", price_categories)

        size_categories = _json_env("SIZE_CATEGORIES")
        if size_categories is not None:
            segments.size_categories = _categories("SIZE_CATEGORIES", size_categories)

        export = ExportConfig(
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            max_rows=int(_number_env("MAX_EXPORT_ROWS")) if os.getenv("MAX_EXPORT_ROWS") else 10000,
        )

        config = cls(
            generation=generation,
            cleaning=cleaning,
            segments=segments,
            export=export,
            sample_size=int(_number_env("SAMPLE_SIZE")) if os.getenv("SAMPLE_SIZE") else 5000,
            seed=int(_number_env("SEED")) if os.getenv("SEED") else 42,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Validate every section."""
        if self.sample_size <= 0:
            raise ConfigurationError(f"sample_size must be positive, got {self.sample_size}")
        self.generation.validate()
        self.cleaning.validate()
        self.segments.validate()


def _json_env(name: str) -> Any:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{name} is not valid JSON: {e}") from e
    if not isinstance(value, dict):
        raise ConfigurationError(f"{name} must be a JSON object")
    return value


def _date_env(name: str) -> date:
    raw = os.environ[name]
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an ISO date, got {raw!r}") from e


def _number_env(name: str) -> float:
    raw = os.environ[name]
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be numeric, got {raw!r}") from e


def _number_value(name: str, key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name}[{key!r}] must be numeric, got {value!r}") from e


def _numbers(name: str, mapping: dict[str, Any]) -> dict[str, float]:
    return {str(k): _number_value(name, k, v) for k, v in mapping.items()}


def _categories(name: str, mapping: dict[str, Any]) -> tuple[tuple[str, float | None], ...]:
    return tuple(
        (str(label), None if bound is None else _number_value(name, label, bound))
        for label, bound in mapping.items()
    )
