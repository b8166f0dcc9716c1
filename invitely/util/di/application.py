"""Application layer DI providers."""

from dishka import Scope, provide

from invitely.application.usecase.auth import (
    AdminLoginUseCase,
    GetCurrentAdminUseCase,
    GetCurrentUserUseCase,
    UserLoginUseCase,
)
from invitely.application.usecase.invitation import (
    CreateInvitationUseCase,
    DuplicateInvitationUseCase,
    PublishInvitationUseCase,
    SubmitRsvpUseCase,
    UnpublishInvitationUseCase,
    UpdateInvitationUseCase,
    ViewPublicInvitationUseCase,
)
from invitely.domain.service import (
    AdminAuthService,
    GuestService,
    IdentityProvider,
    InvitationService,
    JWTService,
    TemplateService,
    UserService,
)
from invitely.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Use case provider, REQUEST-scoped like the services it composes."""

    scope = Scope.REQUEST

    # Auth

    @provide
    def get_admin_login_use_case(
        self, admin_auth_service: AdminAuthService, jwt_service: JWTService
    ) -> AdminLoginUseCase:
        """Provide admin login use case."""
        return AdminLoginUseCase(
            admin_auth_service=admin_auth_service, jwt_service=jwt_service
        )

    @provide
    def get_current_admin_use_case(
        self, jwt_service: JWTService, admin_auth_service: AdminAuthService
    ) -> GetCurrentAdminUseCase:
        """Provide current admin use case."""
        return GetCurrentAdminUseCase(
            jwt_service=jwt_service, admin_auth_service=admin_auth_service
        )

    @provide
    def get_user_login_use_case(
        self,
        identity_provider: IdentityProvider,
        user_service: UserService,
        jwt_service: JWTService,
    ) -> UserLoginUseCase:
        """Provide end-user login use case."""
        return UserLoginUseCase(
            identity_provider=identity_provider,
            user_service=user_service,
            jwt_service=jwt_service,
        )

    @provide
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # Invitations

    @provide
    def get_create_invitation_use_case(
        self,
        invitation_service: InvitationService,
        template_service: TemplateService,
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(
            invitation_service=invitation_service, template_service=template_service
        )

    @provide
    def get_update_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> UpdateInvitationUseCase:
        """Provide update invitation use case."""
        return UpdateInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_publish_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> PublishInvitationUseCase:
        """Provide publish invitation use case."""
        return PublishInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_unpublish_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> UnpublishInvitationUseCase:
        """Provide unpublish invitation use case."""
        return UnpublishInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_duplicate_invitation_use_case(
        self,
        invitation_service: InvitationService,
        template_service: TemplateService,
    ) -> DuplicateInvitationUseCase:
        """Provide duplicate invitation use case."""
        return DuplicateInvitationUseCase(
            invitation_service=invitation_service, template_service=template_service
        )

    @provide
    def get_view_public_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> ViewPublicInvitationUseCase:
        """Provide public invitation view use case."""
        return ViewPublicInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_submit_rsvp_use_case(
        self, invitation_service: InvitationService, guest_service: GuestService
    ) -> SubmitRsvpUseCase:
        """Provide RSVP submission use case."""
        return SubmitRsvpUseCase(
            invitation_service=invitation_service, guest_service=guest_service
        )
