"""Results of realtime operations.

Realtime handlers never raise to the socket. Every operation returns one of
these values instead, which keeps drops observable in logs and tests.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class DropReason(str, Enum):
    """Why a realtime event was not applied or not delivered."""

    NOT_PARTICIPANT = "not_participant"
    EMPTY_CONTENT = "empty_content"
    NOT_IN_ROOM = "not_in_room"
    MALFORMED = "malformed"
    SUBSCRIBER_BACKLOG = "subscriber_backlog"
    DISCONNECTED = "disconnected"
    UNEXPECTED = "unexpected"


class _Outcome(BaseModel):
    model_config = ConfigDict(frozen=True)


class Dropped(_Outcome):
    """The event was discarded."""

    reason: DropReason
    chat_id: Optional[int] = None


class Joined(_Outcome):
    """The connection now receives the chat's events."""

    chat_id: int


class Left(_Outcome):
    """The connection no longer receives the chat's events."""

    chat_id: int


class Delivered(_Outcome):
    """An ephemeral event was enqueued for the room's subscribers."""

    chat_id: int
    recipients: int


Outcome = Union[Dropped, Joined, Left, Delivered]
