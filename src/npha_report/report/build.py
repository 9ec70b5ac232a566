from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..analysis.quality import QualitySummary, summarize_quality
from ..config import load_config
from ..data.load import load_survey
from ..data.recode import recode
from ..schema import DEFAULT_CODEBOOK, Codebook
from ..utils.io import ensure_dirs, raw_dataset_path, save_table
from .charts import REPORT_CHARTS, chart_table, render_chart


@dataclass
class ReportArtifacts:
    records: pd.DataFrame
    quality: QualitySummary
    tables: Dict[str, Path] = field(default_factory=dict)
    figures: List[Path] = field(default_factory=list)


def build_report(
    config_path: str | os.PathLike | None = None,
    codebook: Codebook = DEFAULT_CODEBOOK,
    cfg: Optional[Dict] = None,
) -> ReportArtifacts:
    """Load, recode and count the survey, then write tables, figures and a quality summary."""
    cfg = cfg if cfg is not None else load_config(config_path)
    source = raw_dataset_path(cfg)

    out_root = Path(cfg["paths"]["outputs"])
    out_tabs = out_root / "tables"
    out_figs = out_root / "figs"
    ensure_dirs(out_tabs, out_figs)

    loaded = load_survey(source, codebook)
    recoded = recode(loaded.frame, codebook)
    quality = summarize_quality(loaded, recoded)
    records = recoded.frame

    artifacts = ReportArtifacts(records=records, quality=quality)
    artifacts.tables["normalized"] = save_table(records, out_tabs / "normalized.csv")
    artifacts.tables["quality"] = save_table(quality.to_frame(codebook), out_tabs / "quality_summary.csv")

    for spec in REPORT_CHARTS:
        artifacts.tables[spec.name] = save_table(
            chart_table(records, spec, codebook), out_tabs / f"{spec.name}.csv"
        )
        artifacts.figures.append(render_chart(records, spec, out_figs, codebook))

    print("\n".join(quality.lines()))
    print(f"✓ Report complete.\nTables → {out_tabs}\nFigs → {out_figs}")
    return artifacts


__all__ = ["ReportArtifacts", "build_report"]
