"""Strongly typed identifiers for domain entities.

Using NewType prevents mixing up IDs of different entities.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ResellerId = NewType("ResellerId", UUID)
AdminId = NewType("AdminId", UUID)
TemplateId = NewType("TemplateId", UUID)
InvitationId = NewType("InvitationId", UUID)
GuestId = NewType("GuestId", UUID)
AnalyticsEventId = NewType("AnalyticsEventId", UUID)
