from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from ..data.load import LoadResult
from ..data.recode import RecodeResult
from ..schema import DEFAULT_CODEBOOK, Codebook


@dataclass
class QualitySummary:
    """How much of the survey was skipped, unmapped or imputed during a run."""

    rows_read: int
    rows_kept: int
    skipped_rows: List[int] = field(default_factory=list)
    unmapped: Dict[str, int] = field(default_factory=dict)
    imputed: Dict[str, int] = field(default_factory=dict)

    @property
    def rows_skipped(self) -> int:
        return len(self.skipped_rows)

    def to_frame(self, codebook: Codebook = DEFAULT_CODEBOOK) -> pd.DataFrame:
        rows = [
            {
                "column": label,
                "unmapped": int(self.unmapped.get(label, 0)),
                "imputed": int(self.imputed.get(label, 0)),
                "imputed_pct": (
                    100.0 * self.imputed.get(label, 0) / self.rows_kept if self.rows_kept else 0.0
                ),
            }
            for label in codebook.labels
        ]
        return pd.DataFrame(rows).set_index("column")

    def lines(self) -> List[str]:
        out = [
            f"Rows read: {self.rows_read}",
            f"Rows kept: {self.rows_kept} (skipped {self.rows_skipped} unparseable)",
        ]
        for label, n in self.unmapped.items():
            out.append(f"  {label}: {n} undeclared code(s) treated as missing")
        for label, n in self.imputed.items():
            out.append(f"  {label}: {n} cell(s) imputed")
        return out


def summarize_quality(loaded: LoadResult, recoded: RecodeResult) -> QualitySummary:
    return QualitySummary(
        rows_read=loaded.rows_read,
        rows_kept=len(recoded.frame),
        skipped_rows=loaded.skipped_rows,
        unmapped=dict(recoded.unmapped),
        imputed=dict(recoded.imputed),
    )


__all__ = ["QualitySummary", "summarize_quality"]
