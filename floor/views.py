from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse_lazy
from django.views import View
from django.views.generic import TemplateView

from . import repository
from .analytics import compute_daily_summary
from .exceptions import FloorError, StoreUnavailable
from .forms import BookingForm
from .transitions import Action, allowed_actions


# ==============================================================================
# FLOOR BOARD
# ==============================================================================

class FloorBoardView(TemplateView):
    template_name = "floor/board.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        try:
            tables = repository.list_tables()
        except StoreUnavailable as exc:
            messages.error(self.request, exc.message)
            tables = []
        context.update({
            "tables": [(table, allowed_actions(table.status)) for table in tables],
            "booking_form": BookingForm(),
            "actions": Action,
        })
        return context


class TableActionView(View):
    """Handles the buttons and booking form posted from the board page."""

    success_url = reverse_lazy("floor:board")

    def post(self, request, table_id, action):
        booking = None
        if action == Action.BOOK:
            form = BookingForm(request.POST)
            if not form.is_valid():
                messages.error(request, "Could not create the booking: check the form fields.")
                return redirect(self.success_url)
            booking = form.booking_data()

        try:
            table = repository.transition_table(table_id, action, reservation=booking)
        except FloorError as exc:
            messages.error(request, exc.message)
        else:
            messages.success(request, f"Table {table.table_number} is now {table.get_status_display().lower()}.")
        return redirect(self.success_url)


# ==============================================================================
# ANALYTICS
# ==============================================================================

def analytics_page(request):
    try:
        summary = compute_daily_summary()
    except StoreUnavailable as exc:
        messages.error(request, exc.message)
        summary = None
    return render(request, "floor/analytics.html", {"summary": summary})
