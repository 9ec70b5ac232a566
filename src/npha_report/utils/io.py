from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

import pandas as pd


def ensure_dirs(*dirs: Path) -> None:
    for d in dirs:
        d.mkdir(parents=True, exist_ok=True)


def raw_dataset_path(cfg: Dict) -> Path:
    path = Path(cfg["paths"]["raw"]) / cfg["data"]["file"]
    if not path.exists():
        raise FileNotFoundError(
            f"Expected survey export at '{path}'. Place the CSV under {path.parent}/ and rerun."
        )
    return path


def save_table(table: Union[pd.DataFrame, pd.Series], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(path)
    return path


__all__ = ["ensure_dirs", "raw_dataset_path", "save_table"]
