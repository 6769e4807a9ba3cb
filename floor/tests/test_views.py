from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.urls import reverse

from floor.models import Reservation, Table


class FloorBoardPageTests(TestCase):

    def setUp(self):
        self.table = Table.objects.create(table_number=1, capacity=4)
        Table.objects.create(table_number=2, capacity=2, status="reserved")

    def action_url(self, action):
        return reverse("floor:table-action", args=[self.table.pk, action])

    def test_board_lists_tables_with_legal_actions(self):
        response = self.client.get(reverse("floor:board"))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "floor/board.html")
        self.assertContains(response, "#1")
        self.assertContains(response, "Seat walk-in", count=1)
        self.assertContains(response, "Free up", count=1)

    def test_walk_in_from_board(self):
        response = self.client.post(self.action_url("walk_in"), follow=True)
        self.assertRedirects(response, reverse("floor:board"))
        self.assertContains(response, "Table 1 is now occupied.")
        self.table.refresh_from_db()
        self.assertEqual(self.table.status, "occupied")

    def test_booking_form(self):
        data = {"customer_name": "Anna", "phone_number": "0123456789", "guest_count": 3, "notes": "window"}
        self.client.post(self.action_url("book"), data)
        self.table.refresh_from_db()
        self.assertEqual(self.table.status, "reserved")
        self.assertEqual(Reservation.objects.get().notes, "window")

    def test_invalid_booking_form_is_reported(self):
        data = {"customer_name": "A", "phone_number": "1", "guest_count": 0}
        response = self.client.post(self.action_url("book"), data, follow=True)
        self.assertContains(response, "Could not create the booking")
        self.table.refresh_from_db()
        self.assertEqual(self.table.status, "available")

    def test_illegal_action_is_reported(self):
        response = self.client.post(self.action_url("free_up"), follow=True)
        self.assertContains(response, "Cannot free up a table that is available.")


class AnalyticsPageTests(TestCase):

    def test_occupancy_percent(self):
        Table.objects.create(table_number=1, capacity=4, status="occupied")
        Table.objects.create(table_number=2, capacity=4, status="reserved")
        Table.objects.create(table_number=3, capacity=4)

        response = self.client.get(reverse("floor:analytics"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["summary"].occupancy_percent, 67)
        self.assertContains(response, "67%")

    def test_empty_floor(self):
        response = self.client.get(reverse("floor:analytics"))
        self.assertContains(response, "0%")


class SeedFloorCommandTests(TestCase):

    def test_seed_is_idempotent(self):
        call_command("seed_floor", tables=3, capacity=2, stdout=StringIO())
        call_command("seed_floor", tables=4, stdout=StringIO())
        self.assertEqual(list(Table.objects.values_list("table_number", flat=True)), [1, 2, 3, 4])
        self.assertEqual(Table.objects.get(table_number=1).capacity, 2)
        self.assertTrue(all(t.status == "available" for t in Table.objects.all()))

    def test_rejects_non_positive_counts(self):
        with self.assertRaises(CommandError):
            call_command("seed_floor", tables=0, stdout=StringIO())
