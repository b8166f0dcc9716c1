"""User domain service."""

from datetime import timedelta
from typing import Any, Optional
from uuid import uuid4

import logfire

from invitely.domain.error import DuplicateKeyError, NotFoundError
from invitely.domain.model import User
from invitely.domain.model.common import utcnow
from invitely.domain.repository import (
    GuestRepository,
    InvitationFilter,
    InvitationRepository,
    ResellerRepository,
    UserRepository,
)
from invitely.domain.value import (
    InvitationCategory,
    PageRequest,
    ResellerId,
    ResellerType,
    UserId,
    ValueObject,
)

from .base import Service

RECENT_SIGNUPS_WINDOW = timedelta(days=30)


class UserStats(ValueObject):
    """Platform-wide user figures."""

    total_users: int
    total_invitations: int
    total_resellers: int
    recent_signups: int
    reseller_type_distribution: dict[ResellerType, int]
    category_distribution: dict[InvitationCategory, int]


class UserService(Service):
    """Domain service for end-user accounts."""

    def __init__(
        self,
        user_repository: UserRepository,
        reseller_repository: ResellerRepository,
        invitation_repository: InvitationRepository,
        guest_repository: GuestRepository,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            reseller_repository: Reseller repository
            invitation_repository: Invitation repository
            guest_repository: Guest repository
        """
        self.user_repository = user_repository
        self.reseller_repository = reseller_repository
        self.invitation_repository = invitation_repository
        self.guest_repository = guest_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_email(self, email: str) -> User:
        """Get a user by email.

        Raises:
            NotFoundError: If no user has the email
        """
        user = await self.user_repository.find_by_email(email)
        if user is None:
            raise NotFoundError("User", email)
        return user

    async def list_users(
        self,
        page: PageRequest,
        search: Optional[str] = None,
        reseller_id: Optional[ResellerId] = None,
    ) -> tuple[list[User], int]:
        """List users, newest first.

        Returns:
            Tuple of (page of users, total matching)
        """
        with logfire.span("user_service.list_users", page=page.page, search=search):
            items = await self.user_repository.find_all(
                search=search,
                reseller_id=reseller_id,
                limit=page.limit,
                offset=page.offset,
            )
            total = await self.user_repository.count(
                search=search, reseller_id=reseller_id
            )
            return items, total

    async def create_user(
        self,
        email: str,
        name: Optional[str] = None,
        avatar_url: Optional[str] = None,
        reseller_id: Optional[ResellerId] = None,
    ) -> User:
        """Create a user.

        Raises:
            DuplicateKeyError: If the email is taken
            NotFoundError: If the reseller does not exist
        """
        with logfire.span("user_service.create_user", email=email):
            if await self.user_repository.find_by_email(email) is not None:
                raise DuplicateKeyError("User", "email", email)
            if reseller_id is not None:
                await self._require_reseller(reseller_id)

            now = utcnow()
            user = User(
                id=UserId(uuid4()),
                email=email,
                name=name,
                avatar_url=avatar_url,
                reseller_id=reseller_id,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info("User created", user_id=str(saved.id))
            return saved

    async def get_or_create(
        self, email: str, name: Optional[str] = None, avatar_url: Optional[str] = None
    ) -> User:
        """Find a user by email, creating the account on first sight.

        Name and avatar are refreshed from the identity provider when they changed.
        """
        user = await self.user_repository.find_by_email(email)
        if user is None:
            return await self.create_user(email=email, name=name, avatar_url=avatar_url)

        changes = {
            k: v
            for k, v in (("name", name), ("avatar_url", avatar_url))
            if v and getattr(user, k) != v
        }
        if not changes:
            return user
        return await self.user_repository.save(
            user.model_copy(update={**changes, "updated_at": utcnow()})
        )

    async def update_user(self, user_id: UserId, changes: dict[str, Any]) -> User:
        """Change name, avatar or reseller attribution.

        Raises:
            NotFoundError: If the user or the new reseller does not exist
        """
        user = await self.get_by_id(user_id)
        with logfire.span(
            "user_service.update_user", user_id=str(user_id), fields=sorted(changes)
        ):
            if changes.get("reseller_id") is not None:
                await self._require_reseller(changes["reseller_id"])
            updated = User.model_validate(
                {**user.model_dump(), **changes, "updated_at": utcnow()}
            )
            return await self.user_repository.save(updated)

    async def delete_user(self, user_id: UserId) -> None:
        """Delete a user with all their invitations and guests.

        Raises:
            NotFoundError: If the user does not exist
        """
        await self.get_by_id(user_id)
        with logfire.span("user_service.delete_user", user_id=str(user_id)):
            filters = InvitationFilter(user_id=user_id)
            total = await self.invitation_repository.count(filters)
            invitations = await self.invitation_repository.find_all(
                filters, limit=max(total, 1)
            )
            for invitation in invitations:
                await self.guest_repository.delete_by_invitation(invitation.id)
            deleted = await self.invitation_repository.delete_by_user(user_id)
            await self.user_repository.delete(user_id)
            logfire.info(
                "User deleted", user_id=str(user_id), invitations_deleted=deleted
            )

    async def stats(self) -> UserStats:
        """Summarize users, invitations and resellers."""
        with logfire.span("user_service.stats"):
            by_category = await self.invitation_repository.count_by_category()
            by_type = await self.reseller_repository.count_by_type()
            return UserStats(
                total_users=await self.user_repository.count(),
                total_invitations=sum(by_category.values()),
                total_resellers=sum(by_type.values()),
                recent_signups=await self.user_repository.count_created_since(
                    utcnow() - RECENT_SIGNUPS_WINDOW
                ),
                reseller_type_distribution={
                    t: by_type.get(t, 0) for t in ResellerType
                },
                category_distribution={
                    c: by_category.get(c, 0) for c in InvitationCategory
                },
            )

    async def _require_reseller(self, reseller_id: ResellerId) -> None:
        if await self.reseller_repository.find_by_id(reseller_id) is None:
            raise NotFoundError("Reseller", str(reseller_id))
