from django.core.validators import MaxValueValidator, MinLengthValidator, MinValueValidator
from django.db import models
from django.utils import timezone

# Largest value every supported backend stores in an integer column.
INTEGER_MAX = 2147483647


# =============================================================================
# === TABLES ==================================================================
# =============================================================================

class Table(models.Model):
    """A physical seating unit on the restaurant floor."""

    class Status(models.TextChoices):
        AVAILABLE = "available", "Available"
        OCCUPIED = "occupied", "Occupied"
        RESERVED = "reserved", "Reserved"

    table_number = models.PositiveIntegerField(unique=True, validators=[MinValueValidator(1)])
    capacity = models.PositiveIntegerField(default=2, validators=[MinValueValidator(1)])
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tables"
        ordering = ["table_number"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=["available", "occupied", "reserved"]),
                name="tables_status_valid",
            ),
            models.CheckConstraint(condition=models.Q(table_number__gt=0), name="tables_number_positive"),
            models.CheckConstraint(condition=models.Q(capacity__gt=0), name="tables_capacity_positive"),
        ]

    def __str__(self):
        return f"Table {self.table_number} ({self.capacity} seats, {self.status})"

    @property
    def is_free(self) -> bool:
        return self.status == self.Status.AVAILABLE


# =============================================================================
# === RESERVATIONS ============================================================
# =============================================================================

class Reservation(models.Model):
    """
    A guest booking against a table.

    Rows are never updated. The table's active reservation is simply the one
    with the latest ``created_at``; there is no status flag.
    """

    table = models.ForeignKey(Table, on_delete=models.PROTECT, related_name="reservations")
    customer_name = models.CharField(max_length=120, validators=[MinLengthValidator(1)])
    phone_number = models.CharField(max_length=32, validators=[MinLengthValidator(10)])
    guest_count = models.PositiveIntegerField(validators=[MinValueValidator(1), MaxValueValidator(INTEGER_MAX)])
    reservation_time = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now, editable=False, db_index=True)

    class Meta:
        db_table = "reservations"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["table", "created_at"], name="reservations_table_created"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(guest_count__gt=0), name="reservations_guests_positive"),
        ]

    def __str__(self):
        return f"{self.customer_name} ({self.guest_count}) @ table {self.table_id}"
