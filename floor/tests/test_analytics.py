from datetime import datetime, timedelta
from unittest import mock
from zoneinfo import ZoneInfo

from django.db import OperationalError
from django.test import SimpleTestCase, TestCase, override_settings

from floor.analytics import compute_daily_summary, day_bounds, occupancy_percent
from floor.exceptions import StoreUnavailable
from floor.models import Reservation, Table

BERLIN = ZoneInfo("Europe/Berlin")


def make_reservation(table, created_at):
    return Reservation.objects.create(
        table=table,
        customer_name="Guest",
        phone_number="0123456789",
        guest_count=2,
        created_at=created_at,
    )


class OccupancyPercentTests(SimpleTestCase):

    def test_rounds_to_whole_percent(self):
        self.assertEqual(occupancy_percent(1, 3), 33)
        self.assertEqual(occupancy_percent(2, 3), 67)
        self.assertEqual(occupancy_percent(4, 4), 100)

    def test_empty_floor_is_zero(self):
        self.assertEqual(occupancy_percent(0, 0), 0)


class DailySummaryTests(TestCase):

    def test_occupied_counts_occupied_and_reserved(self):
        statuses = ["available", "occupied", "reserved", "available", "occupied"]
        for number, status in enumerate(statuses, start=1):
            Table.objects.create(table_number=number, capacity=4, status=status)

        summary = compute_daily_summary()
        self.assertEqual(summary.total_tables, 5)
        self.assertEqual(summary.occupied_tables, 3)
        self.assertEqual(summary.occupancy_percent, 60)

    def test_empty_floor(self):
        summary = compute_daily_summary()
        self.assertEqual(summary.total_tables, 0)
        self.assertEqual(summary.occupied_tables, 0)
        self.assertEqual(summary.reservations_today, 0)
        self.assertEqual(summary.occupancy_percent, 0)

    @override_settings(TIME_ZONE="Europe/Berlin")
    def test_today_is_half_open_local_day(self):
        table = Table.objects.create(table_number=1, capacity=4)
        now = datetime(2026, 3, 10, 15, 0, tzinfo=BERLIN)
        midnight = datetime(2026, 3, 10, 0, 0, tzinfo=BERLIN)
        tomorrow = datetime(2026, 3, 11, 0, 0, tzinfo=BERLIN)

        make_reservation(table, midnight)                                    # counted
        make_reservation(table, tomorrow - timedelta(milliseconds=1))        # counted
        make_reservation(table, midnight - timedelta(milliseconds=1))        # yesterday
        make_reservation(table, tomorrow)                                    # tomorrow

        summary = compute_daily_summary(now=now)
        self.assertEqual(summary.reservations_today, 2)

    @override_settings(TIME_ZONE="Europe/Berlin")
    def test_day_bounds_follow_local_time_zone(self):
        # 23:30 UTC on the 9th is already the 10th in Berlin.
        now = datetime(2026, 3, 9, 23, 30, tzinfo=ZoneInfo("UTC"))
        start, end = day_bounds(now)
        self.assertEqual(start, datetime(2026, 3, 10, 0, 0, tzinfo=BERLIN))
        self.assertEqual(end, datetime(2026, 3, 11, 0, 0, tzinfo=BERLIN))

    def test_store_failure(self):
        with mock.patch.object(Reservation.objects, "filter", side_effect=OperationalError("down")):
            with self.assertRaises(StoreUnavailable):
                compute_daily_summary()
