"""In-memory data store for the dashboard's record set."""

from urban_insights.store.housing import HousingDataStore

__all__ = ["HousingDataStore"]
