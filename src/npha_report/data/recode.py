from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

from ..errors import RecodeTypeError, SchemaError, UnmappedCodeWarning
from ..schema import DEFAULT_CODEBOOK, UNKNOWN, Codebook, ColumnSpec

logger = logging.getLogger(__name__)


@dataclass
class RecodeResult:
    frame: pd.DataFrame
    unmapped: Dict[str, int] = field(default_factory=dict)
    imputed: Dict[str, int] = field(default_factory=dict)
    medians: Dict[str, Optional[int]] = field(default_factory=dict)

    @property
    def total_imputed(self) -> int:
        return int(sum(self.imputed.values()))

    @property
    def total_unmapped(self) -> int:
        return int(sum(self.unmapped.values()))


# ---------------------------------------------------------------------------
# Stage helpers
# ---------------------------------------------------------------------------


def _check_columns(raw: pd.DataFrame, codebook: Codebook) -> None:
    columns = [str(c) for c in raw.columns]
    expected = codebook.raw_names
    if set(columns) == set(codebook.labels) and set(columns) != set(expected):
        raise RecodeTypeError("Frame already carries recoded labels; expected raw survey codes.")
    missing = [c for c in expected if c not in columns]
    if missing:
        raise SchemaError(f"Raw frame is missing expected columns: {missing}")
    unnamed = [c for c in columns if c not in codebook.rename_map]
    if unnamed:
        raise SchemaError(f"No human-readable name declared for raw column(s): {unnamed}")


def _as_codes(series: pd.Series, name: str) -> pd.Series:
    """Validate that ``series`` holds integer codes and return it as ``Int64``."""
    if series.isna().all():
        return pd.Series(pd.NA, index=series.index, dtype="Int64")
    if ptypes.is_bool_dtype(series) or not ptypes.is_numeric_dtype(series):
        raise RecodeTypeError(
            f"Column '{name}' holds {series.dtype} values; expected integer survey codes."
        )
    if ptypes.is_integer_dtype(series):
        return series.astype("Int64")
    present = series.dropna().astype(float)
    if not np.isclose(present % 1, 0).all():
        raise RecodeTypeError(f"Column '{name}' holds non-integer numbers.")
    return series.round().astype("Int64")


def _map_codes(codes: pd.Series, spec: ColumnSpec) -> Tuple[pd.Series, int, List[int]]:
    """Replace codes by labels; unknown codes become missing and are reported."""
    lookup = spec.codes or {}
    unmapped_mask = codes.notna() & ~codes.isin(list(lookup))
    stray = sorted({int(v) for v in codes[unmapped_mask]})
    labels = pd.Series(
        [None if v is pd.NA else lookup.get(int(v)) for v in codes],
        index=codes.index,
        dtype=object,
    )
    return labels, int(unmapped_mask.sum()), stray


def _median_code(codes: pd.Series) -> Optional[int]:
    present = codes.dropna()
    if present.empty:
        return None
    # half-up keeps integer columns integer
    return int(math.floor(float(present.median()) + 0.5))


def _impute_numeric(codes: pd.Series, label: str) -> Tuple[pd.Series, int, Optional[int]]:
    median = _median_code(codes)
    n_missing = int(codes.isna().sum())
    if median is None:
        if n_missing:
            logger.warning("Column '%s' has no observed values; left missing.", label)
        return codes, 0, None
    return codes.fillna(median), n_missing, median


def _impute_categorical(labels: pd.Series, spec: ColumnSpec) -> Tuple[pd.Series, int]:
    n_missing = int(labels.isna().sum())
    filled = labels.where(labels.notna(), UNKNOWN)
    cat = pd.Categorical(filled, categories=spec.categories + [UNKNOWN], ordered=True)
    return pd.Series(cat, index=labels.index), n_missing


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def rename_columns(raw: pd.DataFrame, codebook: Codebook = DEFAULT_CODEBOOK) -> pd.DataFrame:
    """Rename raw survey columns to their human-readable labels."""
    _check_columns(raw, codebook)
    return raw[codebook.raw_names].rename(columns=codebook.rename_map)


def recode(raw: pd.DataFrame, codebook: Codebook = DEFAULT_CODEBOOK) -> RecodeResult:
    """
    Turn a frame of raw survey codes into labelled, fully imputed records.

    Each column is handled on its own:
      - categorical columns: code -> label through the column's code table;
        a code missing from the table counts as unmapped and, like a blank
        cell, ends up as ``"Unknown"``;
      - numeric columns: blanks take the batch median of the integer codes.

    The result columns use the codebook labels, in codebook order.
    Categorical results are ordered ``pd.Categorical`` with the declared labels
    followed by ``"Unknown"``.
    """
    _check_columns(raw, codebook)

    out: Dict[str, pd.Series] = {}
    result = RecodeResult(frame=pd.DataFrame())

    for spec in codebook.columns:
        codes = _as_codes(raw[spec.raw_name], spec.raw_name)

        if spec.codes is None:
            values, n_imputed, median = _impute_numeric(codes, spec.label)
            result.medians[spec.label] = median
        else:
            labels, n_unmapped, stray = _map_codes(codes, spec)
            if n_unmapped:
                result.unmapped[spec.label] = n_unmapped
                warnings.warn(
                    f"{n_unmapped} cell(s) in '{spec.label}' held undeclared code(s) "
                    f"{stray}; treated as missing.",
                    UnmappedCodeWarning,
                    stacklevel=2,
                )
            values, n_imputed = _impute_categorical(labels, spec)

        if n_imputed:
            result.imputed[spec.label] = n_imputed
        out[spec.label] = values.reset_index(drop=True)

    result.frame = pd.DataFrame(out, columns=codebook.labels)
    logger.info(
        "Recoded %d row(s): %d cell(s) imputed, %d unmapped code(s).",
        len(result.frame),
        result.total_imputed,
        result.total_unmapped,
    )
    return result


__all__ = ["RecodeResult", "recode", "rename_columns"]
