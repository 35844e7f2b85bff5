"""Realtime chat delivery over WebSocket."""

from homestead.realtime.broker import ChatBroker
from homestead.realtime.connection import Connection
from homestead.realtime.outcome import (
    Delivered,
    DropReason,
    Dropped,
    Joined,
    Left,
    Outcome,
)

__all__ = [
    "ChatBroker",
    "Connection",
    "Delivered",
    "DropReason",
    "Dropped",
    "Joined",
    "Left",
    "Outcome",
]
