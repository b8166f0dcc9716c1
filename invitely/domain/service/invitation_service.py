"""Invitation lifecycle domain service."""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

import logfire

from invitely.config import InvitationSettings
from invitely.domain.error import (
    BusinessRuleViolationError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from invitely.domain.model import Invitation, InvitationAnalyticsEvent
from invitely.domain.model.common import as_utc, utcnow
from invitely.domain.model.form_data import form_data_variant
from invitely.domain.repository import (
    AnalyticsRepository,
    GuestRepository,
    InvitationFilter,
    InvitationRepository,
)
from invitely.domain.value import (
    AnalyticsEventId,
    AnalyticsEventType,
    InvitationCategory,
    InvitationId,
    InvitationStatus,
    PageRequest,
    Slug,
    TemplateId,
    UserId,
    ValueObject,
)

from .base import Service
from .field_extractor import extract_derived_fields
from .form_validator import FormDataValidator
from .slug_service import SlugService

COPY_SUFFIX = " (Copy)"


class InvitationStats(ValueObject):
    """Per-owner invitation figures."""

    total_invitations: int
    published_invitations: int
    draft_invitations: int
    archived_invitations: int
    expired_invitations: int
    total_views: int
    total_rsvps: int


class ViewContext(ValueObject):
    """Request details recorded with a view event."""

    session_id: Optional[str] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    referrer: Optional[str] = None


class InvitationService(Service):
    """Owns invitation state transitions.

    Every owner operation is scoped by (invitation id, owner id); a miss and
    someone else's invitation look the same to the caller.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        guest_repository: GuestRepository,
        analytics_repository: AnalyticsRepository,
        form_validator: FormDataValidator,
        slug_service: SlugService,
        settings: InvitationSettings,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            guest_repository: Guest repository (cascade on delete)
            analytics_repository: Analytics event store
            form_validator: Form-data validator
            slug_service: Slug generator
            settings: Invitation settings
        """
        self.invitation_repository = invitation_repository
        self.guest_repository = guest_repository
        self.analytics_repository = analytics_repository
        self.form_validator = form_validator
        self.slug_service = slug_service
        self.settings = settings

    async def create(
        self,
        user_id: UserId,
        title: str,
        category: InvitationCategory | str,
        form_data: dict[str, Any],
        template_id: Optional[TemplateId] = None,
        template_customization: Optional[dict[str, Any]] = None,
        rsvp_enabled: bool = True,
        rsvp_deadline: Optional[datetime] = None,
        guest_can_invite_others: bool = False,
        require_approval: bool = False,
    ) -> Invitation:
        """Create a draft invitation.

        Validates the form data, derives the flat fields and assigns a slug.
        A slug rejected by the store's unique constraint is re-picked a
        bounded number of times before falling back to a random one.

        Returns:
            The saved draft

        Raises:
            ValidationError: If the category or form data is invalid
        """
        category = self.form_validator.require_valid(category, form_data)

        with logfire.span(
            "invitation_service.create", user_id=str(user_id), category=category.value
        ):
            derived = extract_derived_fields(category, form_data)
            slug = await self.slug_service.assign_slug(category, form_data)

            now = utcnow()
            invitation = Invitation(
                id=InvitationId(uuid4()),
                user_id=user_id,
                template_id=template_id,
                title=title,
                category=category,
                status=InvitationStatus.DRAFT,
                form_data=dict(form_data),
                event_date=derived.event_date,
                venue_name=derived.venue_name,
                venue_address=derived.venue_address,
                template_customization=template_customization or {},
                slug=slug,
                rsvp_enabled=rsvp_enabled,
                rsvp_deadline=rsvp_deadline,
                guest_can_invite_others=guest_can_invite_others,
                require_approval=require_approval,
                created_at=now,
                updated_at=now,
            )

            for attempt in range(self.settings.max_slug_insert_retries):
                try:
                    return await self._insert(invitation)
                except DuplicateKeyError as e:
                    if e.field != "slug":
                        raise
                    logfire.warn(
                        "Slug taken on insert, picking another",
                        slug=str(invitation.slug),
                        attempt=attempt + 1,
                    )
                    slug = await self.slug_service.assign_slug(category, form_data)
                    invitation = invitation.model_copy(update={"slug": slug})

            invitation = invitation.model_copy(
                update={"slug": self.slug_service.fallback_slug(category)}
            )
            return await self._insert(invitation)

    async def _insert(self, invitation: Invitation) -> Invitation:
        saved = await self.invitation_repository.save(invitation)
        logfire.info(
            "Invitation created",
            invitation_id=str(saved.id),
            slug=str(saved.slug),
            category=saved.category.value,
        )
        return saved

    async def get_owned(
        self, invitation_id: InvitationId, user_id: UserId
    ) -> Invitation:
        """Get an invitation owned by the user.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        with logfire.span(
            "invitation_service.get_owned",
            invitation_id=str(invitation_id),
            user_id=str(user_id),
        ):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if invitation is None or not invitation.is_owned_by(user_id):
                logfire.warn(
                    "Invitation not found for owner",
                    invitation_id=str(invitation_id),
                    user_id=str(user_id),
                )
                raise NotFoundError("Invitation", str(invitation_id))
            return invitation

    async def list_owned(
        self,
        user_id: UserId,
        page: PageRequest,
        category: Optional[InvitationCategory] = None,
        status: Optional[InvitationStatus] = None,
        search: Optional[str] = None,
    ) -> tuple[list[Invitation], int]:
        """List one owner's invitations, most recently updated first.

        Returns:
            Tuple of (page of invitations, total matching)
        """
        filters = InvitationFilter(
            user_id=user_id, category=category, status=status, search=search or None
        )
        items = await self.invitation_repository.find_all(
            filters, limit=page.limit, offset=page.offset
        )
        total = await self.invitation_repository.count(filters)
        return items, total

    async def update(
        self,
        invitation_id: InvitationId,
        user_id: UserId,
        title: Optional[str] = None,
        form_data: Optional[dict[str, Any]] = None,
        template_customization: Optional[dict[str, Any]] = None,
        rsvp_enabled: Optional[bool] = None,
        rsvp_deadline: Optional[datetime] = None,
        guest_can_invite_others: Optional[bool] = None,
        require_approval: Optional[bool] = None,
        clear_rsvp_deadline: bool = False,
    ) -> Invitation:
        """Update an owned invitation.

        Incoming form data is shallow-merged into the stored form data and
        validated against the stored category. The slug never changes.
        A ``None`` argument leaves the field alone; ``clear_rsvp_deadline``
        removes a stored deadline.

        Raises:
            NotFoundError: If missing or owned by someone else
            ValidationError: If the merged form data is invalid
        """
        invitation = await self.get_owned(invitation_id, user_id)

        with logfire.span(
            "invitation_service.update", invitation_id=str(invitation_id)
        ):
            changes: dict[str, Any] = {"updated_at": utcnow()}

            if form_data is not None:
                merged = {**invitation.form_data, **form_data}
                self.form_validator.require_valid(invitation.category, merged)
                derived = extract_derived_fields(invitation.category, merged)
                changes.update(
                    form_data=merged,
                    event_date=derived.event_date,
                    venue_name=derived.venue_name,
                    venue_address=derived.venue_address,
                )

            optional_changes = {
                "title": title,
                "template_customization": template_customization,
                "rsvp_enabled": rsvp_enabled,
                "rsvp_deadline": as_utc(rsvp_deadline),
                "guest_can_invite_others": guest_can_invite_others,
                "require_approval": require_approval,
            }
            changes.update({k: v for k, v in optional_changes.items() if v is not None})
            if clear_rsvp_deadline:
                changes["rsvp_deadline"] = None

            if "title" in changes and not changes["title"].strip():
                raise ValidationError("Title is required")

            saved = await self.invitation_repository.save(
                invitation.model_copy(update=changes)
            )
            logfire.info(
                "Invitation updated",
                invitation_id=str(invitation_id),
                fields=sorted(k for k in changes if k != "updated_at"),
            )
            return saved

    async def publish(
        self,
        invitation_id: InvitationId,
        user_id: UserId,
        expires_at: Optional[datetime] = None,
        meta_title: Optional[str] = None,
        meta_description: Optional[str] = None,
        og_image_url: Optional[str] = None,
    ) -> Invitation:
        """Publish an owned invitation.

        Raises:
            NotFoundError: If missing or owned by someone else
            BusinessRuleViolationError: If the invitation is archived
            ValidationError: If the expiry is in the past, or required fields
                are missing while completeness is enforced
        """
        invitation = await self.get_owned(invitation_id, user_id)

        with logfire.span(
            "invitation_service.publish", invitation_id=str(invitation_id)
        ):
            if invitation.status == InvitationStatus.ARCHIVED:
                raise BusinessRuleViolationError(
                    "Archived invitations cannot be published"
                )

            now = utcnow()
            expires_at = as_utc(expires_at)
            if expires_at is not None and expires_at <= now:
                raise ValidationError("Expiry date must be in the future")

            if self.settings.require_complete_on_publish:
                missing = form_data_variant(invitation.category).missing_required(
                    invitation.form_data
                )
                if missing:
                    raise ValidationError([f"{key} is required" for key in missing])

            changes: dict[str, Any] = {
                "status": InvitationStatus.PUBLISHED,
                "is_published": True,
                "published_at": now,
                "updated_at": now,
                "expires_at": expires_at,
            }
            for key, value in (
                ("meta_title", meta_title),
                ("meta_description", meta_description),
                ("og_image_url", og_image_url),
            ):
                if value is not None:
                    changes[key] = value

            saved = await self.invitation_repository.save(
                invitation.model_copy(update=changes)
            )
            logfire.info(
                "Invitation published",
                invitation_id=str(invitation_id),
                slug=str(saved.slug),
            )
            return saved

    async def unpublish(
        self, invitation_id: InvitationId, user_id: UserId
    ) -> Invitation:
        """Return an owned invitation to draft.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        invitation = await self.get_owned(invitation_id, user_id)

        with logfire.span(
            "invitation_service.unpublish", invitation_id=str(invitation_id)
        ):
            saved = await self.invitation_repository.save(
                invitation.model_copy(
                    update={
                        "status": InvitationStatus.DRAFT,
                        "is_published": False,
                        "published_at": None,
                        "updated_at": utcnow(),
                    }
                )
            )
            logfire.info("Invitation unpublished", invitation_id=str(invitation_id))
            return saved

    async def delete(self, invitation_id: InvitationId, user_id: UserId) -> None:
        """Delete an owned invitation together with its guests.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        invitation = await self.get_owned(invitation_id, user_id)
        await self.remove(invitation.id)

    async def remove(self, invitation_id: InvitationId) -> None:
        """Delete an invitation and its guests, without an ownership check."""
        with logfire.span(
            "invitation_service.remove", invitation_id=str(invitation_id)
        ):
            guests = await self.guest_repository.delete_by_invitation(invitation_id)
            deleted = await self.invitation_repository.delete(invitation_id)
            if not deleted:
                raise NotFoundError("Invitation", str(invitation_id))
            logfire.info(
                "Invitation deleted",
                invitation_id=str(invitation_id),
                guests_deleted=guests,
            )

    async def duplicate(
        self,
        invitation_id: InvitationId,
        user_id: UserId,
        title: Optional[str] = None,
    ) -> Invitation:
        """Copy an owned invitation into a fresh draft.

        The copy gets a new id, a new slug and zeroed counters.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        original = await self.get_owned(invitation_id, user_id)

        with logfire.span(
            "invitation_service.duplicate", invitation_id=str(invitation_id)
        ):
            if not title:
                title = original.title[: 200 - len(COPY_SUFFIX)] + COPY_SUFFIX

            copy = await self.create(
                user_id=user_id,
                title=title,
                category=original.category,
                form_data=dict(original.form_data),
                template_id=original.template_id,
                template_customization=dict(original.template_customization),
                rsvp_enabled=original.rsvp_enabled,
                rsvp_deadline=original.rsvp_deadline,
                guest_can_invite_others=original.guest_can_invite_others,
                require_approval=original.require_approval,
            )
            logfire.info(
                "Invitation duplicated",
                source_id=str(invitation_id),
                copy_id=str(copy.id),
            )
            return copy

    async def get_published(self, slug: Slug) -> Invitation:
        """Get a published, unexpired invitation by slug.

        Raises:
            NotFoundError: If no such invitation is live
        """
        with logfire.span("invitation_service.get_published", slug=str(slug)):
            invitation = await self.invitation_repository.find_by_slug(
                slug, published_only=True
            )
            if invitation is None or invitation.is_expired(utcnow()):
                logfire.warn("Published invitation not found", slug=str(slug))
                raise NotFoundError("Invitation", str(slug))
            return invitation

    async def track_view(
        self, invitation_id: InvitationId, context: Optional[ViewContext] = None
    ) -> bool:
        """Count a view and record an analytics event.

        Failures are logged and swallowed; a view must never break delivery.

        Returns:
            True if the view was counted
        """
        context = context or ViewContext()
        try:
            with logfire.span(
                "invitation_service.track_view", invitation_id=str(invitation_id)
            ):
                await self.invitation_repository.increment_view_count(invitation_id)
                await self.analytics_repository.record(
                    InvitationAnalyticsEvent(
                        id=AnalyticsEventId(uuid4()),
                        invitation_id=invitation_id,
                        event_type=AnalyticsEventType.VIEW,
                        session_id=context.session_id,
                        user_agent=context.user_agent,
                        ip_address=context.ip_address,
                        referrer=context.referrer,
                    )
                )
            return True
        except Exception as e:
            logfire.warn(
                "View tracking failed",
                invitation_id=str(invitation_id),
                error=str(e),
            )
            return False

    async def set_status(
        self, invitation_id: InvitationId, status: InvitationStatus
    ) -> Invitation:
        """Move an invitation to archived or expired (administrative action).

        Raises:
            NotFoundError: If the invitation does not exist
            ValidationError: If the target status is not archived or expired
        """
        if status not in (InvitationStatus.ARCHIVED, InvitationStatus.EXPIRED):
            raise ValidationError("Status must be 'archived' or 'expired'")

        with logfire.span(
            "invitation_service.set_status",
            invitation_id=str(invitation_id),
            status=status.value,
        ):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if invitation is None:
                raise NotFoundError("Invitation", str(invitation_id))

            saved = await self.invitation_repository.save(
                invitation.model_copy(
                    update={
                        "status": status,
                        "is_published": False,
                        "published_at": None,
                        "updated_at": utcnow(),
                    }
                )
            )
            logfire.info(
                "Invitation status changed",
                invitation_id=str(invitation_id),
                status=status.value,
            )
            return saved

    async def stats_for_user(self, user_id: UserId) -> InvitationStats:
        """Summarize one owner's invitations."""
        with logfire.span("invitation_service.stats_for_user", user_id=str(user_id)):
            by_status = await self.invitation_repository.count_by_status(user_id)
            views, rsvps = await self.invitation_repository.sum_engagement(user_id)
            return InvitationStats(
                total_invitations=sum(by_status.values()),
                published_invitations=by_status.get(InvitationStatus.PUBLISHED, 0),
                draft_invitations=by_status.get(InvitationStatus.DRAFT, 0),
                archived_invitations=by_status.get(InvitationStatus.ARCHIVED, 0),
                expired_invitations=by_status.get(InvitationStatus.EXPIRED, 0),
                total_views=views,
                total_rsvps=rsvps,
            )
