from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

UNKNOWN = "Unknown"

CATEGORICAL = "categorical"
NUMERIC = "numeric"


# ---------------------------------------------------------------------------
# Column metadata
# ---------------------------------------------------------------------------


def code_table(pairs: Iterable[Tuple[int, str]]) -> Mapping[int, str]:
    """Freeze ``(code, label)`` pairs into a read-only, ordered mapping."""
    table: Dict[int, str] = {}
    for code, label in pairs:
        if code in table:
            raise ValueError(f"Duplicate code {code} in code table.")
        if label == UNKNOWN:
            raise ValueError(f"'{UNKNOWN}' is reserved and cannot be a declared label.")
        table[int(code)] = str(label)
    return MappingProxyType(table)


@dataclass(frozen=True)
class ColumnSpec:
    raw_name: str
    label: str
    codes: Optional[Mapping[int, str]] = None

    @property
    def kind(self) -> str:
        return CATEGORICAL if self.codes is not None else NUMERIC

    @property
    def categories(self) -> List[str]:
        """Declared labels in code-table order (empty for numeric columns)."""
        if self.codes is None:
            return []
        return list(self.codes.values())


@dataclass(frozen=True)
class Codebook:
    """Ordered set of column specs; source of the rename map and code tables."""

    columns: Tuple[ColumnSpec, ...]
    _by_label: Mapping[str, ColumnSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        raw = [c.raw_name for c in self.columns]
        labels = [c.label for c in self.columns]
        if len(set(raw)) != len(raw):
            raise ValueError("Codebook contains duplicate raw column names.")
        if len(set(labels)) != len(labels):
            raise ValueError("Codebook contains duplicate labels.")
        object.__setattr__(self, "_by_label", MappingProxyType({c.label: c for c in self.columns}))

    @property
    def raw_names(self) -> List[str]:
        return [c.raw_name for c in self.columns]

    @property
    def labels(self) -> List[str]:
        return [c.label for c in self.columns]

    @property
    def rename_map(self) -> Dict[str, str]:
        return {c.raw_name: c.label for c in self.columns}

    def by_label(self, label: str) -> ColumnSpec:
        try:
            return self._by_label[label]
        except KeyError:
            raise KeyError(f"Unknown column label '{label}'.") from None


# ---------------------------------------------------------------------------
# NPHA doctor-visit survey
# ---------------------------------------------------------------------------

HEALTH_RATING = code_table(
    [(-1, "Refused"), (1, "Excellent"), (2, "Very Good"), (3, "Good"), (4, "Fair"), (5, "Poor")]
)
YES_NO = code_table([(0, "No"), (1, "Yes")])

NPHA_COLUMNS: Tuple[ColumnSpec, ...] = (
    ColumnSpec(
        "Number_of_Doctors_Visited",
        "Doctors Visited",
        code_table([(1, "0-1 doctors"), (2, "2-3 doctors"), (3, "4 or more doctors")]),
    ),
    ColumnSpec("Age", "Age Group", code_table([(1, "50-64"), (2, "65-80")])),
    # Upstream header spells it "Phyiscal".
    ColumnSpec("Phyiscal_Health", "Physical Health", HEALTH_RATING),
    ColumnSpec("Mental_Health", "Mental Health", HEALTH_RATING),
    ColumnSpec("Dental_Health", "Dental Health", HEALTH_RATING),
    ColumnSpec(
        "Employment",
        "Employment Status",
        code_table(
            [
                (-1, "Refused"),
                (1, "Working full-time"),
                (2, "Working part-time"),
                (3, "Retired"),
                (4, "Not working"),
            ]
        ),
    ),
    ColumnSpec("Stress_Keeps_Patient_from_Sleeping", "Stress Impact", YES_NO),
    ColumnSpec("Medication_Keeps_Patient_from_Sleeping", "Medication Impact", YES_NO),
    ColumnSpec("Pain_Keeps_Patient_from_Sleeping", "Pain Impact", YES_NO),
    ColumnSpec("Bathroom_Needs_Keeps_Patient_from_Sleeping", "Bathroom Needs Impact", YES_NO),
    # Upstream header spells it "Uknown".
    ColumnSpec("Uknown_Keeps_Patient_from_Sleeping", "Unknown Impact", YES_NO),
    ColumnSpec(
        "Trouble_Sleeping",
        "Trouble Sleeping",
        code_table([(-1, "Refused"), (1, "Yes"), (2, "No")]),
    ),
    ColumnSpec(
        "Prescription_Sleep_Medication",
        "Prescription Medication",
        code_table(
            [(-1, "Refused"), (1, "Use regularly"), (2, "Use occasionally"), (3, "Do not use")]
        ),
    ),
    ColumnSpec(
        "Race",
        "Race Ethnicity",
        code_table(
            [
                (-2, "Not asked"),
                (-1, "Refused"),
                (1, "White, Non-Hispanic"),
                (2, "Black, Non-Hispanic"),
                (3, "Other, Non-Hispanic"),
                (4, "Hispanic"),
                (5, "2+ Races, Non-Hispanic"),
            ]
        ),
    ),
    ColumnSpec(
        "Gender",
        "Gender",
        code_table([(-2, "Not asked"), (-1, "Refused"), (1, "Male"), (2, "Female")]),
    ),
)

DEFAULT_CODEBOOK = Codebook(NPHA_COLUMNS)


__all__ = [
    "UNKNOWN",
    "CATEGORICAL",
    "NUMERIC",
    "code_table",
    "ColumnSpec",
    "Codebook",
    "HEALTH_RATING",
    "YES_NO",
    "NPHA_COLUMNS",
    "DEFAULT_CODEBOOK",
]
