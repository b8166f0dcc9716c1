"""Unit tests for CreateInvitationUseCase."""

from uuid import uuid4

import pytest
from dishka import AsyncContainer

from invitely.application.usecase.invitation import (
    CreateInvitationRequest,
    CreateInvitationUseCase,
)
from invitely.domain.error import ValidationError
from invitely.domain.service import TemplateService
from invitely.domain.value import InvitationCategory, InvitationStatus, TemplateStyle
from tests.factories import wedding_form_data
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

USER_ID = str(uuid4())


def _request(**overrides) -> CreateInvitationRequest:
    fields = {
        "user_id": USER_ID,
        "title": "Sarah & John Wedding",
        "category": "wedding",
        "form_data": wedding_form_data(),
    }
    fields.update(overrides)
    return CreateInvitationRequest(**fields)


class TestCreateInvitationUseCase:
    """Tests for CreateInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_creates_draft(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(CreateInvitationUseCase)

        view = await use_case.execute(_request())

        assert view.status == InvitationStatus.DRAFT
        assert view.slug == "sarah-john-wedding"
        assert view.user_id == USER_ID
        assert view.view_count == 0

    @pytest.mark.asyncio
    async def test_counts_template_use(self, unit_env: AsyncContainer):
        # Arrange
        templates = await unit_env.get(TemplateService)
        template = await templates.create_template(
            name="Rose Garden",
            category=InvitationCategory.WEDDING,
            style=TemplateStyle.FLORAL,
        )
        use_case = await unit_env.get(CreateInvitationUseCase)

        # Act
        view = await use_case.execute(_request(template_id=str(template.id)))

        # Assert
        assert view.template_id == str(template.id)
        refreshed = await templates.get_template(template.id)
        assert refreshed.usage_count == 1
        assert refreshed.popularity_score == 1

    @pytest.mark.asyncio
    async def test_template_of_other_category(self, unit_env: AsyncContainer):
        templates = await unit_env.get(TemplateService)
        template = await templates.create_template(
            name="Balloons",
            category=InvitationCategory.BIRTHDAY,
            style=TemplateStyle.MODERN,
        )
        use_case = await unit_env.get(CreateInvitationUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(_request(template_id=str(template.id)))

        assert str(exc_info.value) == "Template category does not match invitation type"

    @pytest.mark.asyncio
    async def test_unknown_template(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(CreateInvitationUseCase)

        with pytest.raises(ValidationError, match="Template not found"):
            await use_case.execute(_request(template_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_inactive_template(self, unit_env: AsyncContainer):
        templates = await unit_env.get(TemplateService)
        template = await templates.create_template(
            name="Old Lace",
            category=InvitationCategory.WEDDING,
            style=TemplateStyle.VINTAGE,
            is_active=False,
        )
        use_case = await unit_env.get(CreateInvitationUseCase)

        with pytest.raises(ValidationError, match="Template not found"):
            await use_case.execute(_request(template_id=str(template.id)))

    @pytest.mark.asyncio
    async def test_unknown_category(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(CreateInvitationUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(_request(category="funeral"))
