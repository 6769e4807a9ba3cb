import asyncio

from django.core.management.base import BaseCommand

from floor.board import FloorBoard
from floor.exceptions import FloorError
from floor.realtime import ChangeFeed


class Command(BaseCommand):
    help = (
        "Print the floor board and reprint it after every table change. "
        "Needs a shared channel layer (REDIS_URL) to see writes from other processes."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--max-events", type=int, default=None,
            help="Stop after this many change notifications.",
        )

    def handle(self, *args, **options):
        try:
            asyncio.run(self.watch(options["max_events"]))
        except KeyboardInterrupt:
            self.stdout.write("Stopped.")

    async def watch(self, max_events=None):
        board = FloorBoard()
        async with ChangeFeed("tables") as feed:
            await self.refresh(board)
            seen = 0
            async for event in feed:
                self.stdout.write(f"-- {event.operation} on {event.table}")
                await self.refresh(board, event)
                seen += 1
                if max_events is not None and seen >= max_events:
                    break

    async def refresh(self, board, event=None):
        try:
            if event is None:
                await board.load()
            else:
                await board.handle_change(event)
        except FloorError as exc:
            self.stderr.write(self.style.ERROR(exc.message))
            return
        self.print_board(board)

    def print_board(self, board):
        for table in board.snapshot():
            self.stdout.write(f"  #{table.table_number:<4} {table.capacity:>2} seats  {table.status}")
        self.stdout.write("")
