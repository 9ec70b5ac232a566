from __future__ import annotations

from typing import List, Sequence, Union

import pandas as pd

from ..schema import DEFAULT_CODEBOOK, UNKNOWN, Codebook

Selector = Union[str, Sequence[str]]


def _selectors(by: Selector) -> List[str]:
    if isinstance(by, str):
        return [by]
    keys = list(by)
    if not 1 <= len(keys) <= 2:
        raise ValueError(f"count() takes one or two column labels, got {len(keys)}.")
    return keys


def category_order(records: pd.DataFrame, label: str, codebook: Codebook = DEFAULT_CODEBOOK) -> List:
    """
    Categories a frequency table is indexed by, in display order.

    Declared code-table labels always appear; ``"Unknown"`` is appended only
    when some record holds it. Numeric columns use their sorted observed values.
    """
    spec = codebook.by_label(label)
    if label not in records.columns:
        raise KeyError(f"Column '{label}' not present in records.")
    values = records[label]
    if spec.codes is None:
        return sorted(values.dropna().unique().tolist())
    order = spec.categories
    if values.astype(object).eq(UNKNOWN).any():
        order = order + [UNKNOWN]
    return order


def count(
    records: pd.DataFrame,
    by: Selector,
    codebook: Codebook = DEFAULT_CODEBOOK,
) -> pd.Series:
    """
    Frequency table over one column, or over a pair of columns.

    Every declared category is present, with zero when unobserved, in declared
    order. For two columns the index is the full (first, second) product.
    """
    keys = _selectors(by)
    orders = [category_order(records, k, codebook) for k in keys]

    if len(keys) == 1:
        index = pd.Index(orders[0], name=keys[0])
    else:
        index = pd.MultiIndex.from_product(orders, names=keys)

    if records.empty:
        table = pd.Series(0, index=index, dtype="int64")
    else:
        column = keys[0] if len(keys) == 1 else keys
        observed = records[column].astype(object).value_counts(sort=False)
        table = observed.reindex(index, fill_value=0).astype("int64")
    table.name = "count"
    return table


def crosstab(
    records: pd.DataFrame,
    index: str,
    columns: str,
    codebook: Codebook = DEFAULT_CODEBOOK,
) -> pd.DataFrame:
    """Two-way counts as a wide frame: rows follow ``index``, columns follow ``columns``."""
    table = count(records, (index, columns), codebook)
    rows = category_order(records, index, codebook)
    cols = category_order(records, columns, codebook)
    return table.unstack(columns).reindex(index=rows, columns=cols)


__all__ = ["category_order", "count", "crosstab"]
