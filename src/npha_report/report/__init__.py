"""Frequency tables and annotated bar charts for the survey report."""

from .build import ReportArtifacts, build_report
from .charts import REPORT_CHARTS, ChartSpec, render_chart

__all__ = ["ReportArtifacts", "build_report", "REPORT_CHARTS", "ChartSpec", "render_chart"]
