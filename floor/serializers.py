# floor/serializers.py

from rest_framework import serializers

from .models import INTEGER_MAX, Reservation, Table
from .transitions import allowed_actions


# ==============================================================================
# Table Serializer
# ==============================================================================

class TableSerializer(serializers.ModelSerializer):
    """Board view of a table, including the actions legal in its state."""

    status_display = serializers.CharField(source="get_status_display", read_only=True)
    actions = serializers.SerializerMethodField()

    class Meta:
        model = Table
        fields = [
            "id",
            "table_number",
            "capacity",
            "status",
            "status_display",
            "actions",
        ]
        read_only_fields = fields

    def get_actions(self, obj):
        return [str(action) for action in allowed_actions(obj.status)]


# ==============================================================================
# Reservation Serializers
# ==============================================================================

class ReservationSerializer(serializers.ModelSerializer):
    table_id = serializers.IntegerField(read_only=True)
    table_number = serializers.IntegerField(source="table.table_number", read_only=True)

    class Meta:
        model = Reservation
        fields = [
            "id",
            "table_id",
            "table_number",
            "customer_name",
            "phone_number",
            "guest_count",
            "reservation_time",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class BookingSerializer(serializers.Serializer):
    """
    Input for the ``book`` action. Mirrors the booking form rules: a name of at
    least two characters, a phone number of at least ten, one or more guests.
    """

    customer_name = serializers.CharField(min_length=2, max_length=120, trim_whitespace=True)
    phone_number = serializers.CharField(min_length=10, max_length=32, trim_whitespace=True)
    guest_count = serializers.IntegerField(min_value=1, max_value=INTEGER_MAX)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


# ==============================================================================
# Integration Helper: Build payloads for Channels Consumers
# ==============================================================================

def serialize_board(tables):
    """Plain list of dicts, safe to put on the channel layer or a websocket."""
    return [dict(row) for row in TableSerializer(tables, many=True).data]
