from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from ..analysis.frequency import category_order, count, crosstab
from ..schema import DEFAULT_CODEBOOK, Codebook


@dataclass(frozen=True)
class ChartSpec:
    name: str
    title: str
    x: str
    hue: Optional[str] = None

    @property
    def by(self) -> Tuple[str, ...]:
        return (self.x,) if self.hue is None else (self.x, self.hue)


REPORT_CHARTS: Tuple[ChartSpec, ...] = (
    ChartSpec("01_doctors_visited", "Number of doctors visited", "Doctors Visited"),
    ChartSpec("02_doctors_by_age", "Doctors visited by age group", "Doctors Visited", "Age Group"),
    ChartSpec(
        "03_physical_health_by_doctors",
        "Self-rated physical health by doctors visited",
        "Physical Health",
        "Doctors Visited",
    ),
    ChartSpec("04_mental_health", "Self-rated mental health", "Mental Health"),
    ChartSpec(
        "05_stress_by_medication",
        "Stress keeping respondents awake, by sleep medication use",
        "Stress Impact",
        "Prescription Medication",
    ),
    ChartSpec("06_trouble_sleeping_by_gender", "Trouble sleeping by gender", "Trouble Sleeping", "Gender"),
)


def _savefig(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(path, bbox_inches="tight")
    plt.close()


def _annotate(ax) -> None:
    for container in ax.containers:
        ax.bar_label(container, fmt="%d", padding=2, fontsize=8)


def chart_data(records: pd.DataFrame, spec: ChartSpec, codebook: Codebook = DEFAULT_CODEBOOK) -> pd.DataFrame:
    """Long-form counts (one row per bar) for a chart spec, in declared order."""
    return count(records, spec.by, codebook).reset_index()


def render_chart(
    records: pd.DataFrame,
    spec: ChartSpec,
    out_dir: Path,
    codebook: Codebook = DEFAULT_CODEBOOK,
) -> Path:
    data = chart_data(records, spec, codebook)
    order = category_order(records, spec.x, codebook)
    data[spec.x] = data[spec.x].astype(str)
    order = [str(v) for v in order]

    plt.figure(figsize=(8, 5))
    if spec.hue is None:
        ax = sns.barplot(data=data, x=spec.x, y="count", order=order, color="#0081A6", errorbar=None)
    else:
        hue_order = [str(v) for v in category_order(records, spec.hue, codebook)]
        data[spec.hue] = data[spec.hue].astype(str)
        ax = sns.barplot(
            data=data,
            x=spec.x,
            y="count",
            hue=spec.hue,
            order=order,
            hue_order=hue_order,
            errorbar=None,
        )
        ax.legend(title=spec.hue, fontsize=8)
    _annotate(ax)
    ax.set_ylabel("Respondents")
    plt.xticks(rotation=20)
    plt.title(spec.title)

    path = out_dir / f"{spec.name}.png"
    _savefig(path)
    return path


def chart_table(records: pd.DataFrame, spec: ChartSpec, codebook: Codebook = DEFAULT_CODEBOOK):
    """Frequency table behind a chart: a Series for one column, a wide frame for two."""
    if spec.hue is None:
        return count(records, spec.x, codebook)
    return crosstab(records, spec.x, spec.hue, codebook)


__all__ = ["ChartSpec", "REPORT_CHARTS", "chart_data", "chart_table", "render_chart"]
