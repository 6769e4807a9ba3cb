"""
floor/routing.py
=====================================================================================
WebSocket route map for Django Channels.
=====================================================================================
"""

from django.urls import re_path

from . import consumers

websocket_urlpatterns = [
    # -------------------------------------------------------------------------
    # Live floor board: full table list on connect and after every change
    # -------------------------------------------------------------------------
    re_path(r"^ws/floor/$", consumers.FloorBoardConsumer.as_asgi()),
]
