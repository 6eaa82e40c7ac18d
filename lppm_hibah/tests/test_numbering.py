"""Tests for nomor surat generation and parsing."""

import pytest

from lppm_hibah.disbursement import (
    MAX_SEQUENCE,
    DocumentNumberGenerator,
    ParsedDocumentNumber,
    SequenceOverflowError,
)


@pytest.fixture
def generator():
    return DocumentNumberGenerator()


class TestNext:
    def test_consecutive_numbers_in_a_year(self, generator):
        assert generator.next(2024, 0) == "SP/0001/LPPM/2024"
        assert generator.next(2024, 1) == "SP/0002/LPPM/2024"

    def test_zero_padding(self, generator):
        assert generator.next(2025, 122) == "SP/0123/LPPM/2025"

    def test_last_sequence_fits(self, generator):
        assert generator.next(2025, MAX_SEQUENCE - 1) == "SP/9999/LPPM/2025"

    def test_overflow_fails_loudly(self, generator):
        with pytest.raises(SequenceOverflowError):
            generator.next(2025, MAX_SEQUENCE)

    def test_overflow_is_a_value_error(self):
        assert issubclass(SequenceOverflowError, ValueError)

    @pytest.mark.parametrize("year,count", [(2025, -1), (10000, 0), (-1, 0)])
    def test_rejects_out_of_range_input(self, generator, year, count):
        with pytest.raises(ValueError):
            generator.next(year, count)


class TestParse:
    def test_parses_number(self, generator):
        assert generator.parse("SP/0123/LPPM/2025") == ParsedDocumentNumber(sequence=123, year=2025)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "SP/123/LPPM/2025",
            "SP/0123/LPPM/25",
            "sp/0123/lppm/2025",
            "SP/0123/LPPM/2025 ",
            "XX/0123/LPPM/2025",
            "SP/0123/LPPM/2025/1",
            "SP/0123/LPPM/2025\n",
            "SP/\u0661\u0662\u0663\u0664/LPPM/2025",
            "SP/0123/LPPM/\uff12\uff10\uff12\uff15",
        ],
    )
    def test_mismatch_returns_none(self, generator, text):
        assert generator.parse(text) is None
        assert generator.is_valid(text) is False

    def test_none_input(self, generator):
        assert generator.parse(None) is None

    @pytest.mark.parametrize("sequence", [1, 9, 10, 99, 100, 999, 1000, 4321, 9999])
    @pytest.mark.parametrize("year", [1999, 2024, 2099])
    def test_parse_inverts_next(self, generator, sequence, year):
        number = generator.next(year, sequence - 1)
        assert generator.is_valid(number)
        assert generator.parse(number) == ParsedDocumentNumber(sequence=sequence, year=year)
