"""Synthetic record generators."""

from urban_insights.generators.housing import PropertyRecordGenerator, generate

__all__ = ["PropertyRecordGenerator", "generate"]
