"""Invitation use cases."""

from .create_invitation import CreateInvitationRequest, CreateInvitationUseCase
from .duplicate_invitation import (
    DuplicateInvitationRequest,
    DuplicateInvitationUseCase,
)
from .publish_invitation import (
    PublishInvitationRequest,
    PublishInvitationUseCase,
    UnpublishInvitationRequest,
    UnpublishInvitationUseCase,
)
from .update_invitation import UpdateInvitationRequest, UpdateInvitationUseCase
from .view import InvitationView, PublicInvitationView
from .view_public_invitation import (
    SubmitRsvpRequest,
    SubmitRsvpResponse,
    SubmitRsvpUseCase,
    ViewPublicInvitationRequest,
    ViewPublicInvitationUseCase,
)

__all__ = [
    "CreateInvitationRequest",
    "CreateInvitationUseCase",
    "DuplicateInvitationRequest",
    "DuplicateInvitationUseCase",
    "InvitationView",
    "PublicInvitationView",
    "PublishInvitationRequest",
    "PublishInvitationUseCase",
    "SubmitRsvpRequest",
    "SubmitRsvpResponse",
    "SubmitRsvpUseCase",
    "UnpublishInvitationRequest",
    "UnpublishInvitationUseCase",
    "UpdateInvitationRequest",
    "UpdateInvitationUseCase",
    "ViewPublicInvitationRequest",
    "ViewPublicInvitationUseCase",
]
