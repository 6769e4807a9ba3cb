import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Table",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("table_number", models.PositiveIntegerField(unique=True, validators=[django.core.validators.MinValueValidator(1)])),
                ("capacity", models.PositiveIntegerField(default=2, validators=[django.core.validators.MinValueValidator(1)])),
                (
                    "status",
                    models.CharField(
                        choices=[("available", "Available"), ("occupied", "Occupied"), ("reserved", "Reserved")],
                        default="available",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "tables",
                "ordering": ["table_number"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("status__in", ["available", "occupied", "reserved"])),
                        name="tables_status_valid",
                    ),
                    models.CheckConstraint(condition=models.Q(("table_number__gt", 0)), name="tables_number_positive"),
                    models.CheckConstraint(condition=models.Q(("capacity__gt", 0)), name="tables_capacity_positive"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_name", models.CharField(max_length=120, validators=[django.core.validators.MinLengthValidator(1)])),
                ("phone_number", models.CharField(max_length=32, validators=[django.core.validators.MinLengthValidator(10)])),
                ("guest_count", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(2147483647)])),
                ("reservation_time", models.DateTimeField(default=django.utils.timezone.now)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now, editable=False)),
                (
                    "table",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservations",
                        to="floor.table",
                    ),
                ),
            ],
            options={
                "db_table": "reservations",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["table", "created_at"], name="reservations_table_created")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("guest_count__gt", 0)), name="reservations_guests_positive"),
                ],
            },
        ),
    ]
