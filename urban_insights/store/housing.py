"""In-memory owner of the cleaned housing record set."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from urban_insights.analysis import (
    aggregate,
    apply_filters,
    clean,
    extract_insights,
    price_trends,
)
from urban_insights.config import DashboardConfig
from urban_insights.exceptions import InsufficientDataError
from urban_insights.generators import generate
from urban_insights.models import (
    DashboardSnapshot,
    FilterCriteria,
    GroupBy,
    PropertyRecord,
    TimePeriod,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HousingDataStore:
    """Read-only record set shared by every dashboard view.

    Records are kept as a tuple and handed by reference to the pure
    analysis functions, which never mutate them.
    """

    records: tuple[PropertyRecord, ...]
    config: DashboardConfig = field(default_factory=DashboardConfig)

    @classmethod
    def build(cls, config: DashboardConfig | None = None) -> "HousingDataStore":
        """Generate and clean a sample dataset.

        Parameters
        ----------
        config : DashboardConfig | None
            Sample size, seed and per-stage settings.

        Returns
        -------
        HousingDataStore
            Store holding the cleaned records.

        Raises
        ------
        ConfigurationError
            If the configuration is invalid.
        """
        config = config or DashboardConfig()
        config.validate()

        raw = generate(config.sample_size, seed=config.seed, config=config.generation)
        records = clean(raw, config.cleaning)
        logger.info(
            "Housing store ready: %d of %d generated records kept",
            len(records),
            len(raw),
            extra={"records": len(records), "generated": len(raw), "seed": config.seed},
        )
        return cls(records=tuple(records), config=config)

    def __len__(self) -> int:
        return len(self.records)

    def filtered(self, criteria: FilterCriteria | None = None) -> list[PropertyRecord]:
        """Records matching the current selection."""
        return apply_filters(self.records, criteria)

    def summary(self) -> dict[str, Any]:
        """Headline facts about the full record set."""
        dates = [r.sale_date for r in self.records if r.sale_date is not None]
        prices = [r.price for r in self.records if r.price is not None]
        return {
            "total_properties": len(self.records),
            "date_range": (min(dates), max(dates)) if dates else None,
            "price_range": (min(prices), max(prices)) if prices else None,
            "neighborhoods": len({r.neighborhood for r in self.records}),
            "property_types": len({r.property_type for r in self.records}),
        }

    def snapshot(
        self,
        criteria: FilterCriteria | None = None,
        parallel: bool = False,
    ) -> DashboardSnapshot:
        """Recompute every view for one selection.

        The aggregations are independent, so with ``parallel=True`` they
        run on a thread pool and are collected once all have finished.
        An empty selection yields empty views and ``insights=None``.
        """
        records = self.filtered(criteria)
        segments_config = self.config.segments
        catalog = self.config.generation

        def insights():
            try:
                return extract_insights(
                    records,
                    neighborhoods=catalog.neighborhoods,
                    property_types=catalog.property_types,
                    best_value_min_count=segments_config.best_value_min_count,
                )
            except InsufficientDataError as e:
                logger.info("No insights for current selection: %s", e)
                return None

        tasks: dict[str, Callable[[], Any]] = {
            "by_neighborhood": lambda: aggregate(records, GroupBy.NEIGHBORHOOD, segments_config),
            "by_property_type": lambda: aggregate(records, GroupBy.PROPERTY_TYPE, segments_config),
            "by_year": lambda: aggregate(records, GroupBy.YEAR, segments_config),
            "monthly_trends": lambda: price_trends(records, TimePeriod.MONTH),
            "segments": lambda: aggregate(records, GroupBy.SEGMENT, segments_config),
            "insights": insights,
        }

        if parallel:
            with ThreadPoolExecutor(max_workers=len(tasks)) as executor:
                futures = {name: executor.submit(task) for name, task in tasks.items()}
                results = {name: future.result() for name, future in futures.items()}
        else:
            results = {name: task() for name, task in tasks.items()}

        logger.debug("Snapshot computed over %d records (parallel=%s)", len(records), parallel)
        return DashboardSnapshot(
            criteria=criteria or FilterCriteria(),
            filtered_count=len(records),
            **results,
        )
