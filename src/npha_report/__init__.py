"""Descriptive report over the NPHA doctor-visit survey."""

from .errors import (
    EmptyInputWarning,
    ParseError,
    RecodeTypeError,
    SchemaError,
    SurveyDataError,
    UnmappedCodeWarning,
)
from .schema import DEFAULT_CODEBOOK, UNKNOWN, Codebook, ColumnSpec

__all__ = [
    "DEFAULT_CODEBOOK",
    "UNKNOWN",
    "Codebook",
    "ColumnSpec",
    "SurveyDataError",
    "SchemaError",
    "ParseError",
    "RecodeTypeError",
    "UnmappedCodeWarning",
    "EmptyInputWarning",
]
