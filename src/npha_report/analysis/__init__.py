"""Frequency counts and data-quality summaries."""

from .frequency import category_order, count, crosstab
from .quality import QualitySummary, summarize_quality

__all__ = ["category_order", "count", "crosstab", "QualitySummary", "summarize_quality"]
