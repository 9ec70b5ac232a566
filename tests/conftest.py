import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from npha_report.schema import DEFAULT_CODEBOOK

# A plausible respondent: every column holds a declared code.
BASE_ROW = {
    "Number_of_Doctors_Visited": 2,
    "Age": 1,
    "Phyiscal_Health": 3,
    "Mental_Health": 2,
    "Dental_Health": 4,
    "Employment": 3,
    "Stress_Keeps_Patient_from_Sleeping": 0,
    "Medication_Keeps_Patient_from_Sleeping": 0,
    "Pain_Keeps_Patient_from_Sleeping": 1,
    "Bathroom_Needs_Keeps_Patient_from_Sleeping": 1,
    "Uknown_Keeps_Patient_from_Sleeping": 0,
    "Trouble_Sleeping": 1,
    "Prescription_Sleep_Medication": 3,
    "Race": 1,
    "Gender": 2,
}


def make_rows(n, **columns):
    """n copies of BASE_ROW, with given columns overridden by per-row lists."""
    rows = [dict(BASE_ROW) for _ in range(n)]
    for col, values in columns.items():
        assert len(values) == n
        for row, value in zip(rows, values):
            row[col] = value
    return rows


def to_csv_text(rows, header=None):
    header = header or DEFAULT_CODEBOOK.raw_names
    lines = [",".join(header)]
    for row in rows:
        lines.append(",".join("" if row.get(c) is None else str(row.get(c)) for c in header))
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_csv(tmp_path):
    def _write(rows, header=None, name="survey.csv"):
        path = tmp_path / name
        path.write_text(to_csv_text(rows, header))
        return path

    return _write


@pytest.fixture
def codebook():
    return DEFAULT_CODEBOOK
