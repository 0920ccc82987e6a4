"""Strongly typed identifiers for Mingle domain entities.

User ids are issued by the hosted auth service and are opaque strings;
records owned by this service use UUIDs.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", str)
InvitationId = NewType("InvitationId", UUID)
ConnectionId = NewType("ConnectionId", UUID)
NotificationId = NewType("NotificationId", str)
