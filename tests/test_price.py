"""Tests for price parsing and formatting."""

from where_to_buy.utils.price import format_price, parse_price, price_sort_key


class TestParsePrice:
    def test_rupee_with_thousands_separator(self):
        assert parse_price("₹1,299.00") == 1299.0

    def test_plain_number_string(self):
        assert parse_price("499") == 499.0

    def test_numeric_input(self):
        assert parse_price(45) == 45.0
        assert parse_price(12.5) == 12.5

    def test_first_numeric_run_wins(self):
        assert parse_price("₹499 (was ₹599)") == 499.0

    def test_no_digits(self):
        assert parse_price("Currently unavailable") is None

    def test_empty_and_none(self):
        assert parse_price("") is None
        assert parse_price(None) is None


class TestFormatPrice:
    def test_number(self):
        assert format_price(50) == "₹50.00"

    def test_fraction_rounds_to_two_places(self):
        assert format_price(33.3333) == "₹33.33"

    def test_string_without_symbol(self):
        assert format_price("1,299") == "₹1299.00"

    def test_already_formatted_is_unchanged(self):
        assert format_price("₹1,299") == "₹1,299"

    def test_idempotent(self):
        once = format_price(72.5)
        assert format_price(once) == once

    def test_missing_values(self):
        assert format_price(None) == "₹0.00"
        assert format_price(0) == "₹0.00"
        assert format_price("") == "₹0.00"
        assert format_price("n/a") == "₹0.00"


class TestPriceSortKey:
    def test_missing_sorts_last(self):
        prices = [None, 20.0, 5.0]
        assert sorted(prices, key=price_sort_key) == [5.0, 20.0, None]
