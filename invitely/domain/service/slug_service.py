"""Invitation slug generation."""

import re
import secrets
from typing import Any

import logfire

from invitely.config import InvitationSettings
from invitely.domain.error import SlugGenerationError
from invitely.domain.model.form_data import form_data_variant
from invitely.domain.repository import InvitationRepository
from invitely.domain.value import InvitationCategory, Slug

from .base import Service

MAX_SLUG_LENGTH = 100


class SlugService(Service):
    """Builds unique, URL-safe slugs for invitations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        settings: InvitationSettings,
    ) -> None:
        """Initialize slug service.

        Args:
            invitation_repository: Invitation repository (for uniqueness checks)
            settings: Invitation settings (attempt bounds)
        """
        self.invitation_repository = invitation_repository
        self.settings = settings

    async def assign_slug(
        self, category: InvitationCategory, form_data: dict[str, Any]
    ) -> Slug:
        """Pick a free slug, falling back to a random token on any failure.

        Args:
            category: Invitation category
            form_data: Invitation form data

        Returns:
            A slug that was free at the time of the check
        """
        try:
            return await self.generate_unique_slug(category, form_data)
        except Exception as e:
            slug = self.fallback_slug(category)
            logfire.warn(
                "Slug generation failed, using fallback",
                category=category.value,
                error=str(e),
                slug=str(slug),
            )
            return slug

    async def generate_unique_slug(
        self, category: InvitationCategory, form_data: dict[str, Any]
    ) -> Slug:
        """Generate a unique slug from category-specific name fields.

        Collisions are resolved by appending -1, -2, ... in first-free order.

        Args:
            category: Invitation category
            form_data: Invitation form data

        Returns:
            Unique slug

        Raises:
            SlugGenerationError: If every suffix up to the attempt bound is taken
        """
        with logfire.span(
            "slug_service.generate_unique_slug", category=category.value
        ):
            base = self.base_slug(category, form_data)

            if not await self.invitation_repository.slug_exists(Slug(base)):
                logfire.info("Generated unique slug", slug=base, had_collision=False)
                return Slug(base)

            for counter in range(1, self.settings.max_slug_attempts + 1):
                suffix = f"-{counter}"
                candidate = base[: MAX_SLUG_LENGTH - len(suffix)].rstrip("-") + suffix
                if not await self.invitation_repository.slug_exists(Slug(candidate)):
                    logfire.info(
                        "Generated unique slug", slug=candidate, had_collision=True
                    )
                    return Slug(candidate)

            raise SlugGenerationError(
                f"No free slug for '{base}' after {self.settings.max_slug_attempts} attempts"
            )

    @classmethod
    def base_slug(cls, category: InvitationCategory, form_data: dict[str, Any]) -> str:
        """Sanitized base slug (before any collision suffix)."""
        raw = form_data_variant(category).slug_base(form_data)
        return cls.slugify(raw) or cls.slugify(f"{category.value}-invitation")

    @classmethod
    def fallback_slug(cls, category: InvitationCategory) -> Slug:
        """Random slug that does not depend on the store being reachable."""
        return Slug(cls.slugify(f"{category.value}-invitation-{secrets.token_hex(6)}"))

    @staticmethod
    def slugify(text: str) -> str:
        """Convert text to URL-safe slug format.

        - Converts to lowercase
        - Replaces runs of characters outside [a-z0-9] with one hyphen
        - Strips leading/trailing hyphens
        - Truncates to 100 characters

        Returns:
            Slug string (may be empty if the text has no valid characters)
        """
        slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
        return slug.strip("-")[:MAX_SLUG_LENGTH].rstrip("-")
