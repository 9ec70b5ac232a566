"""Survey loading and recoding."""

from .load import LoadResult, load_survey
from .recode import RecodeResult, recode, rename_columns

__all__ = ["LoadResult", "load_survey", "RecodeResult", "recode", "rename_columns"]
