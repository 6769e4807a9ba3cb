import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from .board import FloorBoard
from .exceptions import FloorError
from .realtime import ChangeEvent, group_for
from .serializers import BookingSerializer, serialize_board
from .transitions import Action

logger = logging.getLogger(__name__)


# ==============================================================================
# Base Helper
# ==============================================================================
class SafeConsumer(AsyncWebsocketConsumer):
    """Base consumer with safe JSON sending method."""

    async def safe_send(self, data: dict):
        try:
            await self.send(text_data=json.dumps(data))
        except Exception as exc:
            logger.error(f"{self.__class__.__name__} failed to send data: {exc}")

    async def send_error(self, message):
        await self.safe_send({"type": "error", "message": message})


# ==============================================================================
# Live Floor Board Consumer
# ==============================================================================
class FloorBoardConsumer(SafeConsumer):
    """
    One board per connection. The board is loaded on connect, refreshed on
    every ``tables`` change notification, and patched locally after the
    client's own actions succeed.
    """

    board_class = FloorBoard

    # --------------------------------------------------------------------------
    # Connection lifecycle
    # --------------------------------------------------------------------------
    async def connect(self):
        self.group_name = group_for("tables")
        self.board = self.board_class()
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"Floor board connected: {self.channel_name}")

        try:
            await self.board.load()
        except FloorError as exc:
            await self.send_error(exc.message)
            return
        await self.send_board()

    async def disconnect(self, code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    # --------------------------------------------------------------------------
    # Client actions
    # --------------------------------------------------------------------------
    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or "")
            action = data["action"]
            table_id = int(data["table_id"])
        except (ValueError, KeyError, TypeError, OverflowError) as exc:
            logger.warning(f"Invalid board payload: {exc}")
            await self.send_error("Invalid request.")
            return

        reservation = None
        if action == Action.BOOK:
            booking = BookingSerializer(data=data.get("reservation") or {})
            if not booking.is_valid():
                await self.safe_send({"type": "error", "message": "Invalid booking details.", "fields": booking.errors})
                return
            reservation = dict(booking.validated_data)

        try:
            table = await self.board.perform(action, table_id, reservation=reservation)
        except FloorError as exc:
            await self.send_error(exc.message)
            return

        logger.debug(f"Board action {action} applied to table {table.table_number}")
        await self.send_board()

    # --------------------------------------------------------------------------
    # Change notifications
    # --------------------------------------------------------------------------
    async def table_change(self, event):
        """Any write to ``tables`` triggers a full re-read of the board."""
        try:
            refreshed = await self.board.handle_change(ChangeEvent.from_message(event))
        except FloorError as exc:
            await self.send_error(exc.message)
            return
        if refreshed:
            await self.send_board()

    async def send_board(self):
        await self.safe_send({"type": "board", "tables": serialize_board(self.board.snapshot())})
