"""
floor/board.py

In-memory view of the floor for one client session.

The board has two update paths that converge on the same mapping:

* ``apply`` – after a write succeeds, the returned row replaces the local copy
  of that one table;
* ``handle_change`` – any change notification for ``tables`` throws the local
  copy away and re-reads the whole list.

There is no ordering between the two. A refresh that was issued before a local
write can land after it and briefly show the older status; the next
notification brings the board back in line.
"""

import logging

from channels.db import database_sync_to_async

from . import repository
from .models import Table

logger = logging.getLogger(__name__)

WATCHED_RELATION = Table._meta.db_table


class AsyncFloorStore:
    """Coroutine facade over ``floor.repository`` for use on the event loop."""

    list_tables = staticmethod(database_sync_to_async(repository.list_tables))
    set_table_status = staticmethod(database_sync_to_async(repository.set_table_status))
    transition_table = staticmethod(database_sync_to_async(repository.transition_table))


class FloorBoard:

    def __init__(self, store=None):
        self.store = store or AsyncFloorStore()
        self._tables = {}
        self.loaded = False

    def __len__(self):
        return len(self._tables)

    def __contains__(self, table_id):
        return table_id in self._tables

    def get(self, table_id):
        return self._tables.get(table_id)

    def snapshot(self):
        """Tables ordered by table number."""
        return sorted(self._tables.values(), key=lambda t: t.table_number)

    # ------------------------------------------------------------------
    # Update paths
    # ------------------------------------------------------------------
    async def refresh(self):
        """Replace the whole mapping with a fresh read of the store."""
        tables = await self.store.list_tables()
        self._tables = {t.pk: t for t in tables}
        self.loaded = True
        logger.debug(f"Board refreshed with {len(self._tables)} tables.")
        return self.snapshot()

    load = refresh

    def apply(self, table):
        self._tables[table.pk] = table
        return table

    async def set_status(self, table_id, status):
        table = await self.store.set_table_status(table_id, status)
        return self.apply(table)

    async def perform(self, action, table_id, reservation=None):
        """Run a guarded action through the store and apply its result."""
        table = await self.store.transition_table(table_id, action, reservation=reservation)
        return self.apply(table)

    async def handle_change(self, event):
        """
        React to a change notification. Returns True when the board was
        refreshed, False when the event concerns another relation.
        """
        if event.table != WATCHED_RELATION:
            return False
        logger.debug(f"{event.operation} on {event.table}, refreshing board.")
        await self.refresh()
        return True
