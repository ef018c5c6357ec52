"""
Pricing: billable days and reservation cost
"""

from datetime import date, datetime, timedelta

import pytest

from services.pricing import billable_days, parse_reservation_date, reservation_cost

DAY0 = datetime(2024, 1, 1)


class TestReservationCost:

    def test_zero_length_window_bills_one_day(self):
        assert reservation_cost(100, DAY0, DAY0) == 100

    def test_partial_day_rounds_up(self):
        assert reservation_cost(100, DAY0, DAY0 + timedelta(hours=36)) == 200

    def test_whole_days(self):
        assert reservation_cost(50, "2024-01-01", "2024-01-03") == 100

    def test_one_second_over_is_a_full_day(self):
        assert billable_days(DAY0, DAY0 + timedelta(days=2, seconds=1)) == 3

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValueError):
            reservation_cost(100, "2024-01-03", "2024-01-01")

    def test_fractional_price(self):
        assert reservation_cost(49.5, "2024-01-01", "2024-01-05") == pytest.approx(198.0)


class TestParseReservationDate:

    @pytest.mark.parametrize("value,expected", [
        ("2024-03-10", datetime(2024, 3, 10)),
        ("2024-03-10T08:30:00", datetime(2024, 3, 10, 8, 30)),
        ("2024-03-10T08:30:00Z", datetime(2024, 3, 10, 8, 30)),
        ("2024-03-10T10:30:00+02:00", datetime(2024, 3, 10, 8, 30)),
        (date(2024, 3, 10), datetime(2024, 3, 10)),
    ])
    def test_accepted_formats(self, value, expected):
        assert parse_reservation_date(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", "tomorrow", "2024-13-01", "10/03/2024"])
    def test_rejected_formats(self, value):
        with pytest.raises(ValueError):
            parse_reservation_date(value)

    def test_aware_and_naive_values_compare(self):
        assert billable_days("2024-01-01T00:00:00+00:00", "2024-01-02") == 1

    @pytest.mark.parametrize("value", ["9999-12-31T23:00:00-05:00", "0001-01-01T00:30:00+01:00"])
    def test_offset_past_calendar_limits_is_rejected(self, value):
        with pytest.raises(ValueError, match="out of range"):
            parse_reservation_date(value)
