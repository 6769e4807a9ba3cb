import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import exception_handler

from . import repository
from .analytics import compute_daily_summary
from .exceptions import FloorError, ValidationError
from .serializers import BookingSerializer, ReservationSerializer, TableSerializer
from .transitions import Action

logger = logging.getLogger(__name__)


# ==============================================================================
# ERROR MAPPING
# ==============================================================================

def floor_exception_handler(exc, context):
    """Render domain errors as ``{"error": message}`` with their status code."""
    if isinstance(exc, FloorError):
        return Response({"error": exc.message}, status=exc.status_code)
    return exception_handler(exc, context)


# ==============================================================================
# TABLES
# ==============================================================================

class TableViewSet(viewsets.ViewSet):
    """Read the floor and drive table actions (walk-in, book, free up)."""

    lookup_value_regex = r"\d+"

    def list(self, request):
        return Response(TableSerializer(repository.list_tables(), many=True).data)

    def retrieve(self, request, pk=None):
        return Response(TableSerializer(repository.get_table(pk)).data)

    @action(detail=True, methods=["post"], url_path="walk-in")
    def walk_in(self, request, pk=None):
        table = repository.transition_table(pk, Action.WALK_IN)
        return Response(TableSerializer(table).data)

    @action(detail=True, methods=["post"])
    def book(self, request, pk=None):
        booking = BookingSerializer(data=request.data)
        booking.is_valid(raise_exception=True)
        table, reservation = repository.book_table(pk, booking.validated_data)
        return Response(
            {
                "table": TableSerializer(table).data,
                "reservation": ReservationSerializer(reservation).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"], url_path="free-up")
    def free_up(self, request, pk=None):
        table = repository.transition_table(pk, Action.FREE_UP)
        return Response(TableSerializer(table).data)

    @action(detail=True, methods=["get"])
    def reservation(self, request, pk=None):
        """The table's active (most recent) reservation."""
        table = repository.get_table(pk)
        reservation = repository.get_latest_reservation(table.pk)
        if reservation is None:
            return Response({"error": "No reservation for this table."}, status=status.HTTP_404_NOT_FOUND)
        return Response(ReservationSerializer(reservation).data)


# ==============================================================================
# RESERVATIONS
# ==============================================================================

class ReservationViewSet(viewsets.ViewSet):
    lookup_value_regex = r"\d+"

    def list(self, request):
        table_id = request.query_params.get("table") or None
        if table_id is not None:
            try:
                table_id = int(table_id)
            except ValueError:
                raise ValidationError("The table filter must be a table id.")
        reservations = repository.list_reservations(table_id=table_id)
        return Response(ReservationSerializer(reservations, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(ReservationSerializer(repository.get_reservation(pk)).data)

    def destroy(self, request, pk=None):
        repository.cancel_reservation(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ==============================================================================
# ANALYTICS
# ==============================================================================

@require_GET
def analytics(request):
    """Daily summary, computed fresh on every request."""
    try:
        summary = compute_daily_summary()
    except FloorError as exc:
        logger.error(f"Analytics API error: {exc}", exc_info=True)
        return JsonResponse(
            {"error": "Failed to fetch analytics data", "details": str(exc)},
            status=500,
        )
    return JsonResponse(summary.as_api_dict())
