"""
Unit tests for price sanitization and total computation.
"""

from decimal import Decimal

import pytest
from bill_parser.models.bill import LineItem
from bill_parser.services.totals import compute_total, format_amount, sanitize_price


def items(*prices):
    return [LineItem(name=f"item{i}", price=p) for i, p in enumerate(prices)]


class TestSanitizePrice:
    """Tests for the sanitize_price function"""

    def test_clean_price(self):
        assert sanitize_price("12.00") == Decimal("12.00")

    @pytest.mark.parametrize("noisy", ["Rs 12.00", "$12.00", "12.00 USD", " 12.00 "])
    def test_noisy_price_matches_clean_price(self, noisy):
        """Currency labels and spacing don't change the value"""
        assert sanitize_price(noisy) == sanitize_price("12.00")

    def test_thousands_separator_is_dropped(self):
        assert sanitize_price("1,234.50") == Decimal("1234.50")

    @pytest.mark.parametrize("junk", ["abc", "", "-", ".", "--5", None])
    def test_unparsable_is_zero(self, junk):
        assert sanitize_price(junk) == Decimal("0")

    def test_negative_price_kept(self):
        """Discount lines are negative"""
        assert sanitize_price("-2.50") == Decimal("-2.50")

    def test_reads_leading_number_only(self):
        assert sanitize_price("1.2.3") == Decimal("1.2")
        assert sanitize_price("12-3") == Decimal("12")

    def test_numeric_input(self):
        assert sanitize_price(4.5) == Decimal("4.5")


class TestComputeTotal:
    """Tests for compute_total"""

    def test_tea_and_cake(self):
        bill = [LineItem(name="Tea", price="10.50"), LineItem(name="Cake", price="4.3")]
        assert compute_total(bill) == "14.80"

    def test_empty_list(self):
        assert compute_total([]) == "0.00"

    def test_malformed_price_contributes_zero(self):
        assert compute_total(items("abc", "2.00")) == "2.00"

    def test_discount_is_subtracted(self):
        assert compute_total(items("10.00", "-2.50")) == "7.50"

    def test_total_may_go_negative(self):
        assert compute_total(items("1.00", "-3.00")) == "-2.00"

    def test_rounds_half_up(self):
        assert compute_total(items("1.005")) == "1.01"
        assert compute_total(items("0.125")) == "0.13"
        assert compute_total(items("2.675")) == "2.68"

    def test_rounds_down_below_half(self):
        assert compute_total(items("1.004")) == "1.00"

    def test_zero_is_never_negative(self):
        assert compute_total(items("-0.001")) == "0.00"
        assert compute_total(items("5.00", "-5.00")) == "0.00"

    def test_no_float_drift(self):
        assert compute_total(items("0.10", "0.20")) == "0.30"

    def test_format_amount_pads_fraction(self):
        assert format_amount(Decimal("3")) == "3.00"
        assert format_amount(Decimal("3.5")) == "3.50"


class TestLongNumbers:
    """Very long typed prices must still produce a total"""

    def test_thirty_digit_price(self):
        assert compute_total(items("1" * 30)) == "1" * 30 + ".00"

    def test_long_prices_sum_exactly(self):
        assert compute_total(items("9" * 27, "1")) == "1" + "0" * 27 + ".00"

    def test_long_price_with_fraction_rounds_half_up(self):
        assert compute_total(items("1" * 40 + ".005")) == "1" * 40 + ".01"

    def test_format_amount_large_value(self):
        assert format_amount(Decimal("9" * 35)) == "9" * 35 + ".00"
