from __future__ import annotations

import io
import logging
import os
import warnings
from dataclasses import dataclass, field
from typing import IO, List, Union

import numpy as np
import pandas as pd

from ..errors import EmptyInputWarning, ParseError, SchemaError
from ..schema import DEFAULT_CODEBOOK, Codebook

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, IO[str]]

# Stand-in cell for rows the CSV reader could not split into the header's width.
_MALFORMED = "\x00malformed-row"
_CODE_LIMIT = float(np.iinfo("int64").max)


@dataclass
class LoadResult:
    frame: pd.DataFrame
    skipped: List[ParseError] = field(default_factory=list)

    @property
    def rows_read(self) -> int:
        return len(self.frame) + len(self.skipped_rows)

    @property
    def skipped_rows(self) -> List[int]:
        return sorted({err.row for err in self.skipped})


def _read_text_table(source: Source) -> tuple[pd.DataFrame, List[ParseError]]:
    """
    Read every cell as text. Rows whose field count differs from the header
    are kept in place as placeholders so their row number survives, then
    removed and returned as ``ParseError``s.
    """
    if hasattr(source, "read"):
        content = source.read()
    else:
        with open(source, "r", newline="") as f:
            content = f.read()

    try:
        width = len(pd.read_csv(io.StringIO(content), nrows=0, engine="python").columns)
    except pd.errors.EmptyDataError as exc:
        raise SchemaError("Survey source is empty; expected a header row.") from exc

    overlong: List[List[str]] = []

    def _mark(fields: List[str]) -> List[str]:
        overlong.append(fields)
        return [_MALFORMED] * width

    df = pd.read_csv(
        io.StringIO(content),
        dtype=str,
        keep_default_na=False,
        skipinitialspace=True,
        engine="python",
        on_bad_lines=_mark,
    )
    df.columns = [str(c).strip() for c in df.columns]

    errors: List[ParseError] = []
    marked = df.eq(_MALFORMED).all(axis=1) if not df.empty else pd.Series(False, index=df.index)
    for idx, fields in zip(marked[marked].index, overlong):
        errors.append(
            ParseError(
                row=int(idx) + 1,
                column=None,
                value=",".join(fields),
                reason="wrong number of fields",
            )
        )
    # short rows come back padded with NaN
    short = df.isna().any(axis=1) & ~marked
    for idx in short[short].index:
        present = [v for v in df.loc[idx] if isinstance(v, str)]
        errors.append(
            ParseError(
                row=int(idx) + 1,
                column=None,
                value=",".join(present),
                reason="wrong number of fields",
            )
        )

    bad = marked | short
    if bad.any():
        df = df.copy()
        df.loc[bad] = ""
    return df, errors


def _check_header(df: pd.DataFrame, codebook: Codebook) -> pd.DataFrame:
    missing = [c for c in codebook.raw_names if c not in df.columns]
    if missing:
        raise SchemaError(f"Survey header is missing expected columns: {missing}")
    extra = [c for c in df.columns if c not in codebook.raw_names]
    if extra:
        logger.info("Ignoring %d unexpected column(s): %s", len(extra), extra)
    return df[codebook.raw_names]


def _parse_column(text: pd.Series) -> tuple[pd.Series, pd.Series]:
    """Return (codes, bad_mask): nullable integer codes plus a mask of unparseable cells."""
    stripped = text.str.strip()
    blank = stripped.eq("")
    numbers = pd.to_numeric(stripped.where(~blank), errors="coerce").astype("float64")
    integral = (
        numbers.notna()
        & (numbers.abs().fillna(0) <= _CODE_LIMIT)
        & np.isclose(numbers.fillna(0) % 1, 0)
    )
    bad = ~blank & ~integral
    codes = numbers.where(integral).round().astype("Int64")
    return codes, bad


def _error_order(err: ParseError, codebook: Codebook):
    column = codebook.raw_names.index(err.column) if err.column in codebook.raw_names else -1
    return err.row, column


def load_survey(
    source: Source,
    codebook: Codebook = DEFAULT_CODEBOOK,
    strict: bool = False,
) -> LoadResult:
    """
    Read the delimited survey export into a frame of raw integer codes.

    Blank cells become ``pd.NA``. A row with the wrong number of fields, or
    holding any cell that is not an integer, is left out and reported through
    ``LoadResult.skipped``. With ``strict=True`` the earliest such error (by
    row, then column) is raised as ``ParseError`` instead.
    """
    table, errors = _read_text_table(source)
    text = _check_header(table, codebook)

    parsed = {}
    structural = {err.row for err in errors}
    for col in codebook.raw_names:
        codes, bad = _parse_column(text[col])
        parsed[col] = codes
        for idx in bad[bad].index:
            if int(idx) + 1 in structural:
                continue
            errors.append(ParseError(row=int(idx) + 1, column=col, value=text.at[idx, col]))

    errors.sort(key=lambda e: _error_order(e, codebook))
    if strict and errors:
        raise errors[0]

    frame = pd.DataFrame(parsed, columns=codebook.raw_names, index=text.index)
    if errors:
        bad_rows = sorted({err.row - 1 for err in errors})
        frame = frame.drop(index=bad_rows)
        logger.warning("Skipped %d row(s) that could not be parsed.", len(bad_rows))
    frame = frame.reset_index(drop=True)

    if text.empty:
        warnings.warn("Survey source has a header but no data rows.", EmptyInputWarning, stacklevel=2)

    logger.info("Loaded %d survey row(s).", len(frame))
    return LoadResult(frame=frame, skipped=errors)


__all__ = ["LoadResult", "load_survey"]
