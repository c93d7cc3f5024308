import math
from datetime import date, datetime

import pytest

from restock.utils import (
    add_whole_days,
    days_until_date,
    format_date,
    format_date_short,
    get_date_suffix_for_filename,
    load_csv,
)


class TestAddWholeDays:
    @pytest.mark.parametrize("days,expected", [(0, 18), (0.99, 18), (2.5, 20), (5, 23)])
    def test_floors_fractional_days(self, today, days, expected):
        assert add_whole_days(today, days) == date(2026, 10, expected)

    def test_infinite_is_none(self, today):
        assert add_whole_days(today, math.inf) is None

    def test_out_of_range_is_none(self, today):
        assert add_whole_days(today, 10**9) is None


class TestDaysUntilDate:
    def test_date_and_iso_string(self, today):
        assert days_until_date(date(2026, 10, 20), today) == 2
        assert days_until_date("2026-10-20", today) == 2
        assert days_until_date(datetime(2026, 10, 17, 23, 59), today) == -1

    def test_missing(self, today):
        assert days_until_date(None, today) is None
        assert days_until_date("not a date", today) is None


class TestFormatting:
    def test_format_date(self):
        assert format_date(date(2026, 10, 7)) == "07/10/2026"
        assert format_date("2026-01-31") == "31/01/2026"

    def test_format_date_short(self):
        assert format_date_short(date(2026, 10, 7)) == "07 Oct"

    @pytest.mark.parametrize("value", [None, "", "garbage"])
    def test_missing_values_show_a_dash(self, value):
        assert format_date(value) == "—"
        assert format_date_short(value) == "—"

    def test_filename_suffix(self, today):
        assert get_date_suffix_for_filename(today) == "2026-10-18"


class TestLoadCsv:
    def test_missing_file(self, tmp_path):
        assert load_csv(tmp_path / "nope.csv") is None

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_bytes(b"")
        assert load_csv(path) is None

    def test_latin1_fallback(self, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes("name\nCafé\n".encode("latin-1"))
        df = load_csv(path)
        assert df["name"].tolist() == ["Café"]

    def test_dtype_keeps_text(self, tmp_path):
        path = tmp_path / "ids.csv"
        path.write_text("id,phone\n1,+6281\n", encoding="utf-8")
        df = load_csv(path, dtype={"id": str, "phone": str})
        assert df["id"].tolist() == ["1"]
        assert df["phone"].tolist() == ["+6281"]
