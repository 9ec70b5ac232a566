from __future__ import annotations

import warnings

import pandas as pd
import pytest

from conftest import make_rows
from npha_report.data.recode import recode, rename_columns
from npha_report.errors import RecodeTypeError, SchemaError, UnmappedCodeWarning
from npha_report.schema import UNKNOWN, Codebook, ColumnSpec, code_table


def _raw(rows):
    return pd.DataFrame(rows).astype("Int64")


def test_end_to_end_labels():
    raw = _raw(make_rows(3, Number_of_Doctors_Visited=[1, 2, 2], Age=[1, 2, 1]))
    frame = recode(raw).frame
    assert frame["Doctors Visited"].tolist() == ["0-1 doctors", "2-3 doctors", "2-3 doctors"]
    assert frame["Age Group"].tolist() == ["50-64", "65-80", "50-64"]


def test_rename_is_total_and_drops_raw_names(codebook):
    frame = recode(_raw(make_rows(2))).frame
    assert list(frame.columns) == codebook.labels
    raw_only = set(codebook.raw_names) - set(codebook.labels)
    assert not raw_only & set(frame.columns)


def test_rename_columns_keeps_codes(codebook):
    renamed = rename_columns(_raw(make_rows(2, Age=[2, 1])))
    assert list(renamed.columns) == codebook.labels
    assert renamed["Age Group"].tolist() == [2, 1]


def test_every_value_is_declared_or_unknown(codebook):
    raw = _raw(
        make_rows(
            4,
            Phyiscal_Health=[-1, 5, None, 9],
            Race=[-2, 5, 4, None],
            Gender=[None, -1, 1, 2],
        )
    )
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UnmappedCodeWarning)
        frame = recode(raw).frame
    for spec in codebook.columns:
        allowed = set(spec.categories) | {UNKNOWN}
        values = frame[spec.label]
        assert values.notna().all()
        assert set(values.astype(object)) <= allowed, spec.label
        assert list(values.cat.categories) == spec.categories + [UNKNOWN]
        assert values.cat.ordered


def test_missing_categorical_becomes_unknown():
    raw = _raw(make_rows(4, Gender=[1, None, 2, 1]))
    result = recode(raw)
    assert result.frame["Gender"].tolist() == ["Male", UNKNOWN, "Female", "Male"]
    assert result.imputed == {"Gender": 1}
    assert result.unmapped == {}


def test_unmapped_code_is_reported_and_imputed():
    raw = _raw(make_rows(3, Employment=[1, 7, 7]))
    with pytest.warns(UnmappedCodeWarning, match=r"\[7\]"):
        result = recode(raw)
    assert result.frame["Employment Status"].tolist() == ["Working full-time", UNKNOWN, UNKNOWN]
    assert result.unmapped == {"Employment Status": 2}
    assert result.imputed == {"Employment Status": 2}
    assert result.total_unmapped == 2


def test_refused_is_a_label_not_missing():
    raw = _raw(make_rows(2, Trouble_Sleeping=[-1, 2]))
    result = recode(raw)
    assert result.frame["Trouble Sleeping"].tolist() == ["Refused", "No"]
    assert result.imputed == {}


def test_float_codes_from_pandas_are_accepted():
    raw = pd.DataFrame(make_rows(3, Age=[1, None, 2]))
    assert raw["Age"].dtype == float
    frame = recode(raw).frame
    assert frame["Age Group"].tolist() == ["50-64", UNKNOWN, "65-80"]


def test_recoding_labels_fails_cleanly():
    first = recode(_raw(make_rows(2))).frame
    with pytest.raises(RecodeTypeError):
        recode(first)


def test_labels_under_raw_names_fail_cleanly(codebook):
    relabelled = recode(_raw(make_rows(2))).frame
    relabelled.columns = codebook.raw_names
    with pytest.raises(TypeError):
        recode(relabelled)


def test_missing_column_is_schema_error():
    raw = _raw(make_rows(2)).drop(columns=["Race"])
    with pytest.raises(SchemaError, match="Race"):
        recode(raw)


def test_column_without_target_name_is_schema_error():
    raw = _raw(make_rows(2))
    raw["Extra_Question"] = 1
    with pytest.raises(SchemaError, match="Extra_Question"):
        recode(raw)


def test_empty_frame_recodes_to_empty(codebook):
    raw = pd.DataFrame({c: pd.Series([], dtype="Int64") for c in codebook.raw_names})
    result = recode(raw)
    assert result.frame.empty
    assert list(result.frame.columns) == codebook.labels


def test_input_frame_is_not_modified():
    raw = _raw(make_rows(2, Age=[1, None]))
    before = raw.copy()
    recode(raw)
    pd.testing.assert_frame_equal(raw, before)


# ---------------------------------------------------------------------------
# Numeric columns (median imputation)
# ---------------------------------------------------------------------------

MIXED = Codebook(
    (
        ColumnSpec("visits", "Visits"),
        ColumnSpec("grade", "Grade", code_table([(1, "A"), (2, "B")])),
    )
)


def test_median_imputation_numeric():
    raw = pd.DataFrame({"visits": [1, 2, None, 4], "grade": [1, None, 2, 1]}).astype("Int64")
    result = recode(raw, MIXED)
    assert result.frame["Visits"].tolist() == [1, 2, 2, 4]
    assert str(result.frame["Visits"].dtype) == "Int64"
    assert result.medians == {"Visits": 2}
    assert result.frame["Grade"].tolist() == ["A", UNKNOWN, "B", "A"]
    assert result.imputed == {"Visits": 1, "Grade": 1}


def test_median_of_even_count_rounds_half_up():
    raw = pd.DataFrame({"visits": [1, 2, None], "grade": [1, 1, 1]}).astype("Int64")
    result = recode(raw, MIXED)
    assert result.medians["Visits"] == 2
    assert result.frame["Visits"].tolist() == [1, 2, 2]


def test_median_ignores_unrelated_missing_rows():
    raw = pd.DataFrame({"visits": [5, None, 7, 9, None], "grade": [None, 1, 2, None, 1]}).astype("Int64")
    result = recode(raw, MIXED)
    assert result.frame["Visits"].tolist() == [5, 7, 7, 9, 7]


def test_all_missing_numeric_column_is_left_missing():
    raw = pd.DataFrame({"visits": [None, None], "grade": [1, 2]}).astype("Int64")
    result = recode(raw, MIXED)
    assert result.medians == {"Visits": None}
    assert result.frame["Visits"].isna().all()
    assert "Visits" not in result.imputed
