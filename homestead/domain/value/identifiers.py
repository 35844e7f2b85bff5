"""Strongly typed identifiers for Homestead domain entities.

Identifiers are database-assigned integers. NewType keeps a chat id from
being passed where a rental id is expected.
"""

from typing import NewType

UserId = NewType("UserId", int)
PropertyId = NewType("PropertyId", int)
RentalId = NewType("RentalId", int)
ChatId = NewType("ChatId", int)
MessageId = NewType("MessageId", int)
InviteId = NewType("InviteId", int)
