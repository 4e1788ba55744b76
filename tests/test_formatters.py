import locale
import unittest
from datetime import datetime, timezone

from stockdash.utils.formatters import (
    format_currency,
    format_date,
    format_date_time,
    format_large_number,
    format_number,
    format_percentage,
    get_change_color_class,
)


def _ts(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


class TestFormatters(unittest.TestCase):
    def test_absent_values_render_not_available(self):
        self.assertEqual(format_currency(None), "N/A")
        self.assertEqual(format_number(None), "N/A")
        self.assertEqual(format_large_number(None), "N/A")
        self.assertEqual(format_percentage(None), "N/A")
        self.assertEqual(format_date(None), "N/A")
        self.assertEqual(format_date_time(None), "N/A")
        self.assertEqual(get_change_color_class(None), "")

    def test_currency_uses_us_grouping_and_two_decimals(self):
        self.assertEqual(format_currency(1234.56), "$1,234.56")
        self.assertEqual(format_currency(0), "$0.00")
        self.assertEqual(format_currency(-5), "-$5.00")
        self.assertEqual(format_currency(1234567.891), "$1,234,567.89")

    def test_currency_symbol_and_unknown_code(self):
        self.assertEqual(format_currency(10, "EUR"), "€10.00")
        self.assertEqual(format_currency(10, "cad"), "CA$10.00")
        self.assertEqual(format_currency(10, "XYZ"), "XYZ 10.00")

    def test_currency_rounds_ties_away_from_zero(self):
        self.assertEqual(format_currency(0.125), "$0.13")
        self.assertEqual(format_currency(-0.125), "-$0.13")

    def test_number_respects_decimals(self):
        self.assertEqual(format_number(1234.5), "1,234.50")
        self.assertEqual(format_number(1234.5678, 3), "1,234.568")
        self.assertEqual(format_number(42, 0), "42")

    def test_large_number_suffix_tiers(self):
        self.assertEqual(format_large_number(2.5e12), "2.50T")
        self.assertEqual(format_large_number(1_500_000_000), "1.50B")
        self.assertEqual(format_large_number(3_210_000), "3.21M")
        self.assertEqual(format_large_number(1000), "1.00K")
        self.assertEqual(format_large_number(999_999), "1000.00K")

    def test_large_number_below_thousand_has_no_suffix(self):
        self.assertEqual(format_large_number(999), "999")
        self.assertEqual(format_large_number(12.5), "12.5")
        self.assertEqual(format_large_number(0.12345), "0.123")
        self.assertEqual(format_large_number(-2_000_000), "-2,000,000")

    def test_percentage_sign_prefix(self):
        self.assertEqual(format_percentage(0), "+0.00%")
        self.assertEqual(format_percentage(-5.5), "-5.50%")
        self.assertEqual(format_percentage(3.14159), "+3.14%")
        self.assertEqual(format_percentage(-0.0), "+0.00%")
        self.assertEqual(format_percentage(-0.001), "-0.00%")

    def test_negative_zero_renders_as_zero(self):
        self.assertEqual(format_number(-0.0), "0.00")
        self.assertEqual(format_currency(-0.0), "$0.00")
        self.assertEqual(format_large_number(-0.0), "0")

    def test_non_finite_values_do_not_raise(self):
        inf = float("inf")
        nan = float("nan")

        self.assertEqual(format_currency(inf), "$∞")
        self.assertEqual(format_currency(-inf), "-$∞")
        self.assertEqual(format_currency(nan), "$NaN")
        self.assertEqual(format_number(inf), "∞")
        self.assertEqual(format_large_number(inf), "∞T")
        self.assertEqual(format_large_number(-inf), "-∞")
        self.assertEqual(format_large_number(nan), "NaN")
        self.assertEqual(format_percentage(inf), "+∞%")
        self.assertEqual(format_percentage(nan), "NaN%")
        self.assertEqual(get_change_color_class(-inf), "text-red-600")

    def test_out_of_range_dates_are_invalid(self):
        self.assertEqual(format_date(float("nan")), "Invalid Date")
        self.assertEqual(format_date_time(float("inf")), "Invalid Date")
        self.assertEqual(format_date(1e20), "Invalid Date")

    def test_date_falsy_values(self):
        self.assertEqual(format_date(0), "N/A")
        self.assertEqual(format_date(None), "N/A")
        self.assertEqual(format_date_time(0), "N/A")

    def test_date_short_us_style(self):
        self.assertEqual(format_date(_ts(2024, 1, 5, 12, 0)), "Jan 5, 2024")
        self.assertEqual(format_date(_ts(2023, 12, 25)), "Dec 25, 2023")

    def test_date_time_twelve_hour_clock(self):
        self.assertEqual(format_date_time(_ts(2024, 1, 5, 15, 7)), "Jan 5, 2024, 03:07 PM")
        self.assertEqual(format_date_time(_ts(2024, 1, 5, 0, 30)), "Jan 5, 2024, 12:30 AM")

    def test_dates_stay_english_under_foreign_locale(self):
        previous = locale.setlocale(locale.LC_TIME)
        for name in ("de_DE.UTF-8", "fr_FR.UTF-8", "es_ES.UTF-8"):
            try:
                locale.setlocale(locale.LC_TIME, name)
                break
            except locale.Error:
                continue
        else:
            self.skipTest("no foreign LC_TIME locale installed")
        try:
            self.assertEqual(format_date(_ts(2024, 5, 3)), "May 3, 2024")
            self.assertEqual(format_date_time(_ts(2024, 12, 3, 9, 5)), "Dec 3, 2024, 09:05 AM")
        finally:
            locale.setlocale(locale.LC_TIME, previous)

    def test_month_abbreviations(self):
        months = [format_date(_ts(2024, m, 1)).split()[0] for m in range(1, 13)]
        self.assertEqual(
            months,
            ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
        )

    def test_change_color_class(self):
        self.assertEqual(get_change_color_class(0), "text-green-600")
        self.assertEqual(get_change_color_class(1.2), "text-green-600")
        self.assertEqual(get_change_color_class(-0.01), "text-red-600")


if __name__ == "__main__":
    unittest.main()
