from django.test import SimpleTestCase

from floor import transitions
from floor.board import FloorBoard
from floor.exceptions import InvalidTransition, NotFound, StoreUnavailable
from floor.models import Table
from floor.realtime import ChangeEvent


def copy_table(table):
    return Table(id=table.pk, table_number=table.table_number, capacity=table.capacity, status=table.status)


class FakeStore:
    """
    Async store over an in-memory set of rows. ``stale_reads`` lets a test
    hand out an old snapshot to the next ``list_tables`` calls, the way a
    refresh that was issued before a write might land after it.
    """

    def __init__(self, *tables):
        self.rows = {t.pk: t for t in tables}
        self.stale_reads = []
        self.reads = 0
        self.fail_reads = False

    def snapshot(self):
        return [copy_table(t) for t in sorted(self.rows.values(), key=lambda t: t.table_number)]

    async def list_tables(self):
        self.reads += 1
        if self.fail_reads:
            raise StoreUnavailable()
        if self.stale_reads:
            return self.stale_reads.pop(0)
        return self.snapshot()

    async def set_table_status(self, table_id, status):
        if table_id not in self.rows:
            raise NotFound()
        self.rows[table_id].status = status
        return copy_table(self.rows[table_id])

    async def transition_table(self, table_id, action, reservation=None):
        if table_id not in self.rows:
            raise NotFound()
        row = self.rows[table_id]
        row.status = transitions.next_status(action, row.status)
        return copy_table(row)


def tables_event(operation="UPDATE"):
    return ChangeEvent(operation=operation, table="tables", payload={})


class FloorBoardTests(SimpleTestCase):

    def setUp(self):
        self.store = FakeStore(
            Table(id=10, table_number=2, capacity=4, status="occupied"),
            Table(id=11, table_number=1, capacity=2, status="available"),
            Table(id=12, table_number=3, capacity=6, status="reserved"),
        )
        self.board = FloorBoard(store=self.store)

    def statuses(self):
        return {t.pk: t.status for t in self.board.snapshot()}

    async def test_load_orders_by_table_number(self):
        await self.board.load()
        self.assertEqual([t.table_number for t in self.board.snapshot()], [1, 2, 3])
        self.assertEqual(len(self.board), 3)
        self.assertTrue(self.board.loaded)

    async def test_local_update_after_successful_write(self):
        await self.board.load()
        await self.board.perform("walk_in", 11)
        self.assertEqual(self.board.get(11).status, "occupied")
        self.assertEqual(self.store.reads, 1)

    async def test_set_status_missing_table_leaves_board_unchanged(self):
        await self.board.load()
        before = self.statuses()
        with self.assertRaises(NotFound):
            await self.board.set_status(999, "occupied")
        self.assertEqual(self.statuses(), before)
        self.assertNotIn(999, self.board)

    async def test_invalid_action_leaves_board_unchanged(self):
        await self.board.load()
        before = self.statuses()
        with self.assertRaises(InvalidTransition):
            await self.board.perform("free_up", 11)
        self.assertEqual(self.statuses(), before)

    async def test_any_tables_event_refreshes_everything(self):
        await self.board.load()
        # Written by another client; the board has not seen it yet.
        self.store.rows[12].status = "available"
        self.store.rows[13] = Table(id=13, table_number=4, capacity=2, status="available")

        refreshed = await self.board.handle_change(tables_event("INSERT"))

        self.assertTrue(refreshed)
        self.assertEqual(self.statuses(), {11: "available", 10: "occupied", 12: "available", 13: "available"})

    async def test_refresh_drops_deleted_rows(self):
        await self.board.load()
        del self.store.rows[10]
        await self.board.handle_change(tables_event("DELETE"))
        self.assertNotIn(10, self.board)

    async def test_events_for_other_relations_are_ignored(self):
        await self.board.load()
        refreshed = await self.board.handle_change(ChangeEvent(operation="INSERT", table="reservations"))
        self.assertFalse(refreshed)
        self.assertEqual(self.store.reads, 1)

    async def test_failed_refresh_keeps_previous_mapping(self):
        await self.board.load()
        before = self.statuses()
        self.store.fail_reads = True
        with self.assertRaises(StoreUnavailable):
            await self.board.handle_change(tables_event())
        self.assertEqual(self.statuses(), before)

    async def test_interleaved_free_ups_converge_on_last_refresh(self):
        await self.board.load()
        stale = self.store.snapshot()

        await self.board.perform("free_up", 10)
        self.assertEqual(self.board.get(10).status, "available")

        # The first notification's refresh returns a read taken before the write.
        self.store.stale_reads.append(stale)
        await self.board.handle_change(tables_event())
        self.assertEqual(self.board.get(10).status, "occupied")

        await self.board.perform("free_up", 12)
        await self.board.handle_change(tables_event())

        final = {t.pk: t.status for t in self.store.snapshot()}
        self.assertEqual(self.statuses(), final)
        self.assertEqual(final, {10: "available", 11: "available", 12: "available"})
