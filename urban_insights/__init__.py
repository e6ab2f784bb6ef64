"""Synthetic housing analytics core for the Urban Data Insights dashboard."""

__version__ = "1.0.0"
