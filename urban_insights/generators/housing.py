"""Synthetic housing sale generator."""

import logging
from dataclasses import replace
from datetime import timedelta

from urban_insights.config import GenerationConfig
from urban_insights.exceptions import ConfigurationError
from urban_insights.generators.base import BaseGenerator
from urban_insights.models import PropertyRecord

logger = logging.getLogger(__name__)


class PropertyRecordGenerator(BaseGenerator):
    """Generate a population of property sales.

    Prices are correlated with neighborhood (a fixed multiplier per
    neighborhood) and with size (a second pass adds a premium proportional
    to the distance from the mean square footage).

    Parameters
    ----------
    config : GenerationConfig | None
        Catalogs and distribution parameters. Defaults to ``GenerationConfig()``.
    seed : int | None
        Random seed for reproducibility.
    """

    def __init__(
        self,
        config: GenerationConfig | None = None,
        seed: int | None = None,
    ) -> None:
        super().__init__(seed)
        self.config = config or GenerationConfig()
        self.config.validate()

        cfg = self.config
        self._neighborhoods = list(cfg.neighborhood_weights)
        self._neighborhood_weights = list(cfg.neighborhood_weights.values())
        self._property_types = list(cfg.property_type_weights)
        self._property_type_weights = list(cfg.property_type_weights.values())
        self._bedrooms = list(cfg.bedroom_weights)
        self._bedroom_weights = list(cfg.bedroom_weights.values())
        self._bathrooms = list(cfg.bathroom_weights)
        self._bathroom_weights = list(cfg.bathroom_weights.values())
        self._parking = list(cfg.parking_weights)
        self._parking_weights = list(cfg.parking_weights.values())
        self._day_span = (cfg.max_date - cfg.min_date).days

        logger.debug(
            "Generator catalogs: %d neighborhoods, %d property types, %d days",
            len(self._neighborhoods),
            len(self._property_types),
            self._day_span + 1,
        )

    def generate_batch(self, count: int) -> list[PropertyRecord]:
        """Generate ``count`` records with derived fields filled in.

        Parameters
        ----------
        count : int
            Number of records, must be positive.

        Returns
        -------
        list[PropertyRecord]
            Generated records.

        Raises
        ------
        ConfigurationError
            If ``count`` is not positive.
        """
        if count <= 0:
            raise ConfigurationError(f"Record count must be positive, got {count}")

        logger.info("Generating %d property records (seed=%s)", count, self.seed)

        drafts = [self._generate_one() for _ in range(count)]
        mean_sqft = sum(r.square_footage for r in drafts) / len(drafts)

        return [self._apply_size_premium(r, mean_sqft).with_derived_fields() for r in drafts]

    def _generate_one(self) -> PropertyRecord:
        """Draw one record before the size/price correlation pass."""
        cfg = self.config
        rng = self.rng

        neighborhood = rng.choices(self._neighborhoods, weights=self._neighborhood_weights)[0]
        property_type = rng.choices(self._property_types, weights=self._property_type_weights)[0]
        sale_date = cfg.min_date + timedelta(days=rng.randint(0, self._day_span))

        base_price = round(rng.gauss(cfg.price_mean, cfg.price_sd))
        price = max(round(base_price * cfg.neighborhood_multipliers[neighborhood]), cfg.price_floor)

        sqft = round(rng.gauss(cfg.sqft_mean, cfg.sqft_sd))
        sqft = min(max(sqft, cfg.min_sqft), cfg.max_sqft)

        return PropertyRecord(
            id=self.fake.uuid4(),
            neighborhood=neighborhood,
            property_type=property_type,
            sale_date=sale_date,
            price=float(price),
            square_footage=int(sqft),
            bedrooms=rng.choices(self._bedrooms, weights=self._bedroom_weights)[0],
            bathrooms=float(rng.choices(self._bathrooms, weights=self._bathroom_weights)[0]),
            age_years=rng.randint(cfg.min_age, cfg.max_age),
            parking_spaces=rng.choices(self._parking, weights=self._parking_weights)[0],
            latitude=rng.uniform(*cfg.latitude_range),
            longitude=rng.uniform(*cfg.longitude_range),
        )

    def _apply_size_premium(self, record: PropertyRecord, mean_sqft: float) -> PropertyRecord:
        """Shift the price toward the record's size and clamp it to the price bounds."""
        cfg = self.config
        price = (
            record.price
            + (record.square_footage - mean_sqft) * cfg.size_price_slope
            + self.rng.gauss(0, cfg.price_noise_sd)
        )
        price = min(max(price, cfg.price_floor), cfg.max_price)
        return replace(record, price=float(round(price)))


def generate(
    count: int,
    seed: int | None = None,
    config: GenerationConfig | None = None,
) -> list[PropertyRecord]:
    """Generate ``count`` records, deterministic for a fixed ``seed``."""
    return PropertyRecordGenerator(config=config, seed=seed).generate_batch(count)
