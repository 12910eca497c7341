import unittest

from bs_date import BSDate, Duration, compute_duration, duration_between, parse_bs_date
from errors import InvalidDateFormatError, OrderingError


class ParseBsDateTests(unittest.TestCase):
    def test_parses_fixed_width_string(self):
        self.assertEqual(parse_bs_date("2080-04-04"), BSDate(2080, 4, 4))

    def test_no_range_validation(self):
        self.assertEqual(parse_bs_date("2080-13-35"), BSDate(2080, 13, 35))

    def test_rejects_wrong_separators_and_widths(self):
        for bad in ("2080/01/01", "80-01-01", "2080-1-1", "2080-01-01 ", "2080-01-01\n",
                    "२०८०-०१-०१", "", None, "abcd-ef-gh"):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidDateFormatError):
                    parse_bs_date(bad)

    def test_str_round_trips_format(self):
        self.assertEqual(str(BSDate(2078, 1, 1)), "2078-01-01")


class ComputeDurationTests(unittest.TestCase):
    def test_worked_example(self):
        self.assertEqual(duration_between("2078-01-01", "2080-04-05"), Duration(2, 3, 4))

    def test_day_difference_is_plain_subtraction(self):
        self.assertEqual(duration_between("2078-01-01", "2080-04-04"), Duration(2, 3, 3))

    def test_same_date_is_zero(self):
        d = compute_duration(BSDate(2080, 5, 15), BSDate(2080, 5, 15))
        self.assertEqual(d, Duration(0, 0, 0))

    def test_borrows_month_when_days_negative(self):
        # 2080-01-25 -> 2080-03-05: 1 month, 10 days on a 30-day month
        self.assertEqual(duration_between("2080-01-25", "2080-03-05"), Duration(0, 1, 10))

    def test_borrows_year_when_months_negative(self):
        self.assertEqual(duration_between("2079-11-01", "2080-02-01"), Duration(0, 3, 0))

    def test_borrows_both(self):
        self.assertEqual(duration_between("2079-12-30", "2080-01-01"), Duration(0, 0, 1))

    def test_normalized_ranges(self):
        for start in ("2070-01-01", "2070-06-15", "2070-12-30"):
            for end in ("2075-01-01", "2075-07-29", "2075-12-01"):
                with self.subTest(start=start, end=end):
                    d = duration_between(start, end)
                    self.assertTrue(0 <= d.months <= 11)
                    self.assertTrue(0 <= d.days <= 29)
                    self.assertGreaterEqual(d.years, 0)

    def test_end_before_start_raises(self):
        pairs = [
            ("2080-01-01", "2079-01-01"),
            ("2080-05-01", "2080-04-30"),
            ("2080-05-10", "2080-05-09"),
        ]
        for start, end in pairs:
            with self.subTest(start=start, end=end):
                with self.assertRaises(OrderingError):
                    duration_between(start, end)

    def test_labels(self):
        d = Duration(2, 1, 4)
        self.assertEqual(d.label(), "2 years 1 month 4 days")
        self.assertEqual(d.short_label(), "2y 1m 4d")
        self.assertEqual(d.to_dict(), {"years": 2, "months": 1, "days": 4})


if __name__ == "__main__":
    unittest.main()
