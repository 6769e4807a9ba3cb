# floor/admin.py
from django.contrib import admin, messages
from unfold.admin import ModelAdmin, TabularInline

from . import repository
from .exceptions import FloorError
from .models import Reservation, Table
from .transitions import Action


# =============================================================================
# === ACTIONS =================================================================
# =============================================================================

@admin.action(description="Free up selected tables")
def free_up_tables(modeladmin, request, queryset):
    freed = 0
    for table in queryset:
        try:
            repository.transition_table(table.pk, Action.FREE_UP)
            freed += 1
        except FloorError as exc:
            modeladmin.message_user(request, f"Table {table.table_number}: {exc.message}", messages.WARNING)
    modeladmin.message_user(request, f"{freed} table(s) freed up.")


# =============================================================================
# === TABLES ==================================================================
# =============================================================================

class ReservationInline(TabularInline):
    model = Reservation
    extra = 0
    fields = ("customer_name", "phone_number", "guest_count", "reservation_time", "notes", "created_at")
    readonly_fields = ("created_at",)
    ordering = ("-created_at",)


@admin.register(Table)
class TableAdmin(ModelAdmin):
    list_display = ("table_number", "capacity", "status", "updated_at")
    list_filter = ("status",)
    ordering = ("table_number",)
    inlines = [ReservationInline]
    actions = [free_up_tables]


# =============================================================================
# === RESERVATIONS ============================================================
# =============================================================================

@admin.register(Reservation)
class ReservationAdmin(ModelAdmin):
    list_display = ("customer_name", "table", "guest_count", "phone_number", "reservation_time", "created_at")
    list_filter = ("table", "created_at")
    search_fields = ("customer_name", "phone_number")
    readonly_fields = ("created_at",)
    date_hierarchy = "created_at"
