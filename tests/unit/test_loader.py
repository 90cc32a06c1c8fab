"""
Unit tests for the CSV loader.
"""

import pytest
from datetime import date
from decimal import Decimal
from pathlib import Path

from candlescan.config import LoaderConfig
from candlescan.exceptions import RowParseError
from candlescan.loader import (
    load_day_records,
    parse_date,
    parse_decimal,
    parse_row,
    read_day_records,
)


class TestFieldParsing:
    """Test date and decimal parsing helpers."""

    def test_parse_decimal_exact(self):
        assert parse_decimal(" 58.35 ") == Decimal('58.35')

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1,5", "NaN", "inf"])
    def test_parse_decimal_rejects(self, text):
        with pytest.raises(ValueError):
            parse_decimal(text)

    def test_parse_date_default_format(self):
        assert parse_date("31/10/2016") == date(2016, 10, 31)

    def test_parse_date_custom_format(self):
        assert parse_date("2016-10-31", "%Y-%m-%d") == date(2016, 10, 31)

    @pytest.mark.parametrize("text", ["2016-10-31", "31/13/2016", "", "yesterday"])
    def test_parse_date_rejects(self, text):
        with pytest.raises(ValueError):
            parse_date(text)


class TestParseRow:
    """Test conversion of one row to a DayRecord."""

    def test_valid_row(self):
        record = parse_row(["31/10/2016", "58.25", "58.65", "58.2", "58.35"])

        assert record.date == date(2016, 10, 31)
        assert record.close == Decimal('58.35')
        assert record.is_hammer is False

    def test_wrong_field_count(self):
        with pytest.raises(RowParseError) as exc_info:
            parse_row(["31/10/2016", "58.25", "58.65"], line_number=4)

        assert exc_info.value.line_number == 4
        assert "Line 4" in str(exc_info.value)

    def test_bad_decimal(self):
        with pytest.raises(RowParseError) as exc_info:
            parse_row(["31/10/2016", "58.25", "x", "58.2", "58.35"])

        assert exc_info.value.row == ("31/10/2016", "58.25", "x", "58.2", "58.35")

    def test_high_below_low_reported_with_date(self):
        with pytest.raises(RowParseError) as exc_info:
            parse_row(["31/10/2016", "58.25", "58.00", "58.20", "58.35"], line_number=2)

        assert "2016-10-31" in str(exc_info.value)


class TestReadDayRecords:
    """Test reading rows from text lines."""

    def test_reads_rows_in_order(self, sample_csv_lines):
        result = read_day_records(sample_csv_lines)

        assert [r.date for r in result.records] == [
            date(2016, 10, 31), date(2016, 11, 1), date(2016, 11, 2)
        ]
        assert result.rejected == []
        assert result.total_rows == 3

    def test_without_header(self, sample_csv_lines):
        result = read_day_records(sample_csv_lines[1:], has_header=False)
        assert len(result.records) == 3

    def test_blank_lines_ignored(self, sample_csv_lines):
        lines = sample_csv_lines[:2] + ["\n", "  ,  \n"] + sample_csv_lines[2:]
        result = read_day_records(lines)

        assert len(result.records) == 3
        assert result.rejected == []

    def test_invalid_rows_skipped(self, sample_csv_lines):
        lines = sample_csv_lines + [
            "03/11/2016,58.80,58.00,58.70,59.00\n",
            "04/11/2016,58.80,not-a-number,58.70,59.00\n",
        ]

        result = read_day_records(lines)

        assert len(result.records) == 3
        assert len(result.rejected) == 2
        assert [e.line_number for e in result.rejected] == [5, 6]

    def test_invalid_row_aborts_in_strict_mode(self, sample_csv_lines):
        lines = sample_csv_lines + ["03/11/2016,58.80,58.00,58.70,59.00\n"]

        with pytest.raises(RowParseError) as exc_info:
            read_day_records(lines, skip_invalid=False)

        assert exc_info.value.line_number == 5

    def test_custom_delimiter_and_format(self):
        lines = ["2016-10-31;58.25;58.65;58.2;58.35\n"]

        result = read_day_records(lines, delimiter=";", date_format="%Y-%m-%d", has_header=False)

        assert result.records[0].date == date(2016, 10, 31)

    def test_iso_dates_rejected_with_default_format(self):
        """Dates must use one format end-to-end."""
        result = read_day_records(["2016-10-31,58.25,58.65,58.2,58.35\n"], has_header=False)

        assert result.records == []
        assert len(result.rejected) == 1


class TestLoadDayRecords:
    """Test loading from a file."""

    def test_load_file(self, temp_dir: Path, sample_csv_lines):
        path = temp_dir / "table.csv"
        path.write_text("".join(sample_csv_lines))

        result = load_day_records(path)

        assert len(result.records) == 3
        assert result.source == str(path)
        assert result.records[1].is_hammer is True

    def test_load_with_config(self, temp_dir: Path):
        path = temp_dir / "table.csv"
        path.write_text("2016-10-31|58.25|58.65|58.2|58.35\n")

        config = LoaderConfig(date_format="%Y-%m-%d", delimiter="|", has_header=False)
        result = load_day_records(path, config)

        assert len(result.records) == 1

    def test_missing_file(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            load_day_records(temp_dir / "missing.csv")
