"""
floor/repository.py

Typed access to the ``tables`` and ``reservations`` relations.

Every function here talks to the store synchronously through the ORM and
translates store failures into ``floor.exceptions`` errors. Async callers wrap
these with ``database_sync_to_async`` (see ``floor.board.AsyncFloorStore``).
"""

import logging
from functools import wraps

from django.db import DatabaseError, DataError, IntegrityError, transaction
from django.utils import timezone

from . import transitions
from .exceptions import FloorError, NotFound, StoreUnavailable, ValidationError
from .models import Reservation, Table

logger = logging.getLogger(__name__)

RESERVATION_REQUIRED_FIELDS = ("customer_name", "phone_number", "guest_count")
RESERVATION_OPTIONAL_FIELDS = ("notes", "reservation_time")


def store_errors(func):
    """Translate database errors raised by ``func`` into domain errors."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FloorError:
            raise
        except OverflowError as exc:
            logger.warning(f"{func.__name__} got a value out of the store range: {exc}")
            raise ValidationError("A value is out of range.") from exc
        except (IntegrityError, DataError) as exc:
            logger.warning(f"{func.__name__} rejected by the store: {exc}")
            raise ValidationError("The record violates a store constraint.") from exc
        except DatabaseError as exc:
            logger.error(f"❌ {func.__name__} failed: {exc}", exc_info=True)
            raise StoreUnavailable() from exc

    return wrapper


# =============================================================================
# TABLES
# =============================================================================

@store_errors
def list_tables():
    """All tables ordered by ``table_number`` ascending."""
    return list(Table.objects.order_by("table_number"))


@store_errors
def get_table(table_id):
    try:
        return Table.objects.get(pk=table_id)
    except Table.DoesNotExist:
        raise NotFound(f"Table {table_id} does not exist.")


@store_errors
def set_table_status(table_id, status):
    """
    Write ``status`` to one table and return it.

    This is a plain single-row update with no precondition; use
    ``transition_table`` for user actions.
    """
    if status not in Table.Status.values:
        raise ValidationError(f"Unknown table status: {status!r}.")

    table = get_table(table_id)
    table.status = status
    table.save(update_fields=["status", "updated_at"])
    logger.info(f"🪑 Table {table.table_number} is now {status}.")
    return table


# =============================================================================
# RESERVATIONS
# =============================================================================

@store_errors
def create_reservation(data):
    """
    Insert a reservation and return it with its assigned id.

    ``data`` holds ``table_id`` plus the booking fields. Formats are checked by
    the form/serializer layer; here only presence is enforced.
    """
    missing = [f for f in ("table_id",) + RESERVATION_REQUIRED_FIELDS if data.get(f) in (None, "")]
    if missing:
        raise ValidationError(f"Missing reservation fields: {', '.join(missing)}.")

    table_id = data["table_id"]
    if not Table.objects.filter(pk=table_id).exists():
        raise NotFound(f"Table {table_id} does not exist.")

    fields = {f: data[f] for f in RESERVATION_REQUIRED_FIELDS}
    fields.update({f: data[f] for f in RESERVATION_OPTIONAL_FIELDS if data.get(f) is not None})
    fields.setdefault("reservation_time", timezone.now())

    reservation = Reservation.objects.create(table_id=table_id, **fields)
    logger.info(f"📒 Reservation {reservation.pk} created for table id {table_id}.")
    return reservation


@store_errors
def list_reservations(table_id=None):
    """Reservations newest first, optionally for one table."""
    qs = Reservation.objects.order_by("-created_at", "-id")
    if table_id is not None:
        qs = qs.filter(table_id=table_id)
    return list(qs)


@store_errors
def get_reservation(reservation_id):
    try:
        return Reservation.objects.get(pk=reservation_id)
    except Reservation.DoesNotExist:
        raise NotFound(f"Reservation {reservation_id} does not exist.")


@store_errors
def get_latest_reservation(table_id):
    """The table's active reservation (latest ``created_at``), or ``None``."""
    return (
        Reservation.objects.filter(table_id=table_id)
        .order_by("-created_at", "-id")
        .first()
    )


@store_errors
def cancel_reservation(reservation_id):
    """Delete a reservation. Deleting an absent row is not an error."""
    deleted, _ = Reservation.objects.filter(pk=reservation_id).delete()
    if deleted:
        logger.info(f"🗑️ Reservation {reservation_id} cancelled.")


# =============================================================================
# GUARDED TRANSITIONS
# =============================================================================

def transition_table(table_id, action, reservation=None):
    """
    Apply a named action to a table and return the updated row.

    The row is locked for the duration of the check-and-write. For ``book`` the
    reservation insert and the status update share one transaction, so a
    failed status write never leaves an orphaned reservation behind.
    """
    table, _ = _apply_transition(table_id, action, reservation)
    return table


@store_errors
def _apply_transition(table_id, action, reservation):
    """Locked check-and-write; returns the table and the reservation it created, if any."""
    created = None
    with transaction.atomic():
        try:
            table = Table.objects.select_for_update().get(pk=table_id)
        except Table.DoesNotExist:
            raise NotFound(f"Table {table_id} does not exist.")

        rule = transitions.resolve(action, table.status)

        if rule.creates_reservation:
            if not reservation:
                raise ValidationError("Booking details are required.")
            created = create_reservation({**reservation, "table_id": table.pk})

        previous = table.status
        table.status = rule.target
        table.save(update_fields=["status", "updated_at"])

    logger.info(f"🔄 Table {table.table_number}: {previous} → {table.status} ({rule.action}).")
    return table, created


def seat_walk_in(table_id):
    return transition_table(table_id, transitions.Action.WALK_IN)


def book_table(table_id, reservation):
    """Book a table; returns the reserved table and the reservation made for it."""
    return _apply_transition(table_id, transitions.Action.BOOK, reservation)


def free_table(table_id):
    return transition_table(table_id, transitions.Action.FREE_UP)
