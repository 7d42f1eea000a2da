"""
Tests for price parsing and VAT conversion
"""

from pagesweep.extraction.pricing import parse_price, price_excl_vat, strip_non_price_chars


class TestParsePrice:
    def test_plain_euro_price(self):
        assert parse_price("770 €") == 770.0

    def test_space_thousands_comma_decimal(self):
        assert parse_price("1 250,00 €") == 1250.0

    def test_period_thousands_comma_decimal(self):
        assert parse_price("1.250,00 €") == 1250.0

    def test_comma_decimal(self):
        assert parse_price("12,50 €") == 12.5

    def test_period_thousands_without_decimals(self):
        assert parse_price("2.500 €") == 2500.0

    def test_no_digits(self):
        assert parse_price("N/A") is None
        assert parse_price("") is None
        assert parse_price(None) is None

    def test_junk_is_not_zero(self):
        assert parse_price(",") is None


class TestPriceExclVat:
    def test_values(self):
        assert price_excl_vat("770 €") == "636.36"
        assert price_excl_vat("500 €") == "413.22"
        # 1250 / 1.21
        assert price_excl_vat("1 250,00 €") == "1033.06"

    def test_unparseable_gives_empty_string(self):
        assert price_excl_vat("N/A") == ""
        assert price_excl_vat("Price on request") == ""


def test_strip_non_price_chars():
    assert strip_non_price_chars(" 1 250,00 € ") == "1250,00"
    assert strip_non_price_chars(None) == ""
