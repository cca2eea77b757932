"""Unit tests for the injectable clocks."""

from datetime import date, datetime, timezone

from mess_kernel.domain.clock import DeterministicClock, SystemClock


class TestDeterministicClock:
    def test_fixed_until_advanced(self):
        clock = DeterministicClock(datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc))

        assert clock.now() == clock.now()
        clock.advance(60)
        assert clock.now() == datetime(2026, 10, 19, 9, 31, tzinfo=timezone.utc)

    def test_today(self):
        clock = DeterministicClock(datetime(2026, 2, 28, 23, 59, tzinfo=timezone.utc))
        assert clock.today() == date(2026, 2, 28)

    def test_set_time_resets_advance(self):
        clock = DeterministicClock()
        clock.advance(3600)
        clock.set_time(datetime(2027, 1, 1, tzinfo=timezone.utc))

        assert clock.now() == datetime(2027, 1, 1, tzinfo=timezone.utc)


class TestSystemClock:
    def test_timezone_aware(self):
        assert SystemClock().now().tzinfo is not None


class TestMonthStart:
    def test_first_of_current_month(self):
        clock = DeterministicClock(datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc))

        assert clock.month_start() == date(2026, 10, 1)

    def test_follows_set_time(self):
        clock = DeterministicClock()
        clock.set_time(datetime(2028, 2, 29, tzinfo=timezone.utc))

        assert clock.month_start() == date(2028, 2, 1)
