"""
floor/analytics.py

Daily floor summary: bookings made today and how many tables are taken.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from django.db import DatabaseError
from django.db.models import Count, Q
from django.utils import timezone

from .exceptions import StoreUnavailable
from .models import Reservation, Table

logger = logging.getLogger(__name__)

# Both count as "not free" for occupancy.
TAKEN_STATUSES = (Table.Status.OCCUPIED, Table.Status.RESERVED)


@dataclass(frozen=True)
class DailySummary:
    reservations_today: int
    occupied_tables: int
    total_tables: int

    @property
    def occupancy_percent(self) -> int:
        return occupancy_percent(self.occupied_tables, self.total_tables)

    def as_api_dict(self):
        return {
            "totalReservationsToday": self.reservations_today,
            "occupiedTables": self.occupied_tables,
            "totalTables": self.total_tables,
        }


def occupancy_percent(occupied, total) -> int:
    """Share of taken tables as a whole percent; an empty floor is 0%."""
    if not total:
        return 0
    return round(occupied / total * 100)


def day_bounds(now=None):
    """
    Local midnight today and local midnight tomorrow, as aware datetimes in the
    current time zone. Used as a half-open ``[start, end)`` interval.
    """
    tz = timezone.get_current_timezone()
    today = timezone.localtime(now or timezone.now(), tz).date()
    start = datetime.combine(today, time.min, tzinfo=tz)
    end = datetime.combine(today + timedelta(days=1), time.min, tzinfo=tz)
    return start, end


def compute_daily_summary(now=None) -> DailySummary:
    start, end = day_bounds(now)
    try:
        reservations_today = Reservation.objects.filter(
            created_at__gte=start, created_at__lt=end
        ).count()
        counts = Table.objects.aggregate(
            total=Count("id"),
            occupied=Count("id", filter=Q(status__in=TAKEN_STATUSES)),
        )
    except DatabaseError as exc:
        logger.error(f"❌ Daily summary query failed: {exc}", exc_info=True)
        raise StoreUnavailable() from exc

    return DailySummary(
        reservations_today=reservations_today,
        occupied_tables=counts["occupied"] or 0,
        total_tables=counts["total"] or 0,
    )
