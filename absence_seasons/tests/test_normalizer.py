import datetime

import numpy as np
import pandas as pd
import pytest

from absence_seasons.data import normalizer
from absence_seasons.data.normalizer import (
    FIELD_CANDIDATES,
    RowNormalizer,
    lookup_field,
    normalize_row,
    parse_date_flexible,
    to_number,
    valid_records,
)


class TestLookupField:
    def test_first_present_candidate_wins(self):
        row = {"date": "2023-01-02", "DATE": "2023-03-04"}
        assert lookup_field(row, FIELD_CANDIDATES["date"]) == "2023-01-02"

    def test_empty_string_counts_as_present(self):
        row = {"Date": "", "date": "2023-01-02"}
        assert lookup_field(row, FIELD_CANDIDATES["date"]) == ""

    def test_none_and_nan_are_skipped(self):
        row = {"Date": None, "date": np.nan, "DATE": "2023-05-06"}
        assert lookup_field(row, FIELD_CANDIDATES["date"]) == "2023-05-06"

    def test_no_candidate_present(self):
        assert lookup_field({"Other": "x"}, FIELD_CANDIDATES["absent"]) is None


class TestParseDateFlexible:
    def test_iso_format(self):
        assert parse_date_flexible("2023-10-15") == datetime.date(2023, 10, 15)

    def test_compact_format(self):
        assert parse_date_flexible("20231115") == datetime.date(2023, 11, 15)

    def test_generic_fallback(self):
        assert parse_date_flexible("Oct 15, 2023") == datetime.date(2023, 10, 15)
        assert parse_date_flexible("2023/03/07") == datetime.date(2023, 3, 7)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_date_flexible("  2023-10-15 ") == datetime.date(2023, 10, 15)

    @pytest.mark.parametrize("value", ["", "   ", None, np.nan, "not a date", "2023-02-30",
                                       "now", "today", " Today ", "tomorrow", "yesterday"])
    def test_unusable_values_give_none(self, value):
        assert parse_date_flexible(value) is None

    def test_date_like_values_pass_through(self):
        assert parse_date_flexible(datetime.date(2023, 1, 2)) == datetime.date(2023, 1, 2)
        assert parse_date_flexible(datetime.datetime(2023, 1, 2, 8, 30)) == datetime.date(2023, 1, 2)
        assert parse_date_flexible(pd.Timestamp("2023-01-02")) == datetime.date(2023, 1, 2)

    @pytest.mark.parametrize("value", ["2023-10-15", "20231015"])
    def test_strict_formats_never_reach_generic_parser(self, monkeypatch, value):
        def fail(*args, **kwargs):
            raise AssertionError("generic parser used for a strict-format date")

        monkeypatch.setattr(normalizer.pd, "to_datetime", fail)
        assert parse_date_flexible(value) == datetime.date(2023, 10, 15)

    def test_generic_parser_used_only_after_strict_formats_fail(self, monkeypatch):
        calls = []
        original = pd.to_datetime

        def spy(value, *args, **kwargs):
            calls.append(value)
            return original(value, *args, **kwargs)

        monkeypatch.setattr(normalizer.pd, "to_datetime", spy)
        assert parse_date_flexible("October 15 2023") == datetime.date(2023, 10, 15)
        assert calls == ["October 15 2023"]


class TestToNumber:
    @pytest.mark.parametrize("value, expected", [
        ("5", 5.0),
        (" 12 ", 12.0),
        ("2.5", 2.5),
        (7, 7.0),
        ("-3", -3.0),
    ])
    def test_numeric_values(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, np.nan, "inf", "-inf", "NaN", "1,234", "1_000", [1]])
    def test_non_finite_or_non_numeric_become_zero(self, value):
        result = to_number(value)
        assert result == 0.0
        assert np.isfinite(result)


class TestRowNormalizer:
    def test_canonical_headers(self):
        record = normalize_row({
            "School DBN": "01M015", "Date": "2023-10-15",
            "Enrolled": "180", "Absent": "5", "Present": "175",
        })
        assert record.school_id == "01M015"
        assert record.date == datetime.date(2023, 10, 15)
        assert (record.enrolled, record.absent, record.present) == (180.0, 5.0, 175.0)
        assert record.is_valid

    def test_lowercase_and_uppercase_headers(self):
        record = normalize_row({"schoolDBN": "02M100", "DATE": "20230110", "absent": "3", "PRESENT": "9"})
        assert record.school_id == "02M100"
        assert record.date == datetime.date(2023, 1, 10)
        assert record.absent == 3.0
        assert record.present == 9.0
        assert record.enrolled == 0.0

    def test_missing_fields_default(self):
        record = normalize_row({"Unrelated": "x"})
        assert record.school_id == ""
        assert record.date is None
        assert (record.enrolled, record.absent, record.present) == (0.0, 0.0, 0.0)
        assert not record.is_valid

    def test_compact_date_row(self):
        record = normalize_row({"Date": "20231115", "Absent": "4"})
        assert record.date == datetime.date(2023, 11, 15)
        assert record.month == 11

    def test_empty_date_row_is_invalid(self):
        assert not normalize_row({"Date": "", "Absent": "4"}).is_valid

    def test_non_numeric_absent_row_is_kept_with_zero(self):
        record = normalize_row({"Date": "2023-06-01", "Absent": "abc"})
        assert record.is_valid
        assert record.absent == 0.0

    def test_negative_counts_are_not_clamped(self):
        assert normalize_row({"Date": "2023-06-01", "Absent": "-2"}).absent == -2.0

    def test_counts_are_not_cross_checked(self):
        record = normalize_row({"Date": "2023-06-01", "Enrolled": "1", "Absent": "5", "Present": "5"})
        assert record.is_valid

    def test_candidate_override(self):
        custom = RowNormalizer({"date": ("Day",), "absent": ("Absences",)})
        record = custom.normalize_row({"Day": "2023-09-01", "Absences": "6", "Date": "2020-01-01"})
        assert record.date == datetime.date(2023, 9, 1)
        assert record.absent == 6.0
        assert custom.field_candidates["present"] == FIELD_CANDIDATES["present"]

    def test_unknown_field_override_rejected(self):
        with pytest.raises(ValueError, match="Unknown canonical fields"):
            RowNormalizer({"tardy": ("Tardy",)})

    def test_normalize_frame_and_filter(self):
        df = pd.DataFrame({
            "Date": ["2023-10-15", "", "bogus", "20230110"],
            "Absent": ["5", "1", "2", "3"],
        })
        records = RowNormalizer().normalize_frame(df)
        assert len(records) == 4
        kept = valid_records(records)
        assert [r.absent for r in kept] == [5.0, 3.0]

    def test_normalize_empty_frame(self):
        assert RowNormalizer().normalize_frame(pd.DataFrame()) == []
