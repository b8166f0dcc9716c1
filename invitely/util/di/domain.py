"""Domain layer DI providers."""

from dishka import Scope, provide

from invitely.config import AuthSettings, InvitationSettings
from invitely.domain.repository import (
    AdminRepository,
    AnalyticsRepository,
    GuestRepository,
    InvitationRepository,
    ResellerRepository,
    TemplateRepository,
    UserRepository,
)
from invitely.domain.service import (
    AdminAuthService,
    FormDataValidator,
    GuestService,
    InvitationService,
    InviteService,
    JWTService,
    ResellerService,
    SlugService,
    TemplateService,
    UserService,
)
from invitely.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider.

    Services are REQUEST-scoped to follow the repositories they wrap, which
    share the request's database session.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_form_validator(self) -> FormDataValidator:
        """Provide the per-category form data validator."""
        return FormDataValidator()

    @provide
    def get_slug_service(
        self,
        invitation_repository: InvitationRepository,
        settings: InvitationSettings,
    ) -> SlugService:
        """Provide slug domain service."""
        return SlugService(
            invitation_repository=invitation_repository, settings=settings
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        guest_repository: GuestRepository,
        analytics_repository: AnalyticsRepository,
        form_validator: FormDataValidator,
        slug_service: SlugService,
        settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation lifecycle domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            guest_repository=guest_repository,
            analytics_repository=analytics_repository,
            form_validator=form_validator,
            slug_service=slug_service,
            settings=settings,
        )

    @provide
    def get_invite_service(
        self, invitation_repository: InvitationRepository
    ) -> InviteService:
        """Provide admin invite domain service."""
        return InviteService(invitation_repository=invitation_repository)

    @provide
    def get_guest_service(
        self,
        guest_repository: GuestRepository,
        invitation_repository: InvitationRepository,
        analytics_repository: AnalyticsRepository,
    ) -> GuestService:
        """Provide guest domain service."""
        return GuestService(
            guest_repository=guest_repository,
            invitation_repository=invitation_repository,
            analytics_repository=analytics_repository,
        )

    @provide
    def get_template_service(
        self,
        template_repository: TemplateRepository,
        invitation_repository: InvitationRepository,
    ) -> TemplateService:
        """Provide template domain service."""
        return TemplateService(
            template_repository=template_repository,
            invitation_repository=invitation_repository,
        )

    @provide
    def get_reseller_service(
        self,
        reseller_repository: ResellerRepository,
        user_repository: UserRepository,
        settings: InvitationSettings,
    ) -> ResellerService:
        """Provide reseller domain service."""
        return ResellerService(
            reseller_repository=reseller_repository,
            user_repository=user_repository,
            settings=settings,
        )

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        reseller_repository: ResellerRepository,
        invitation_repository: InvitationRepository,
        guest_repository: GuestRepository,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            reseller_repository=reseller_repository,
            invitation_repository=invitation_repository,
            guest_repository=guest_repository,
        )

    @provide
    def get_admin_auth_service(
        self, admin_repository: AdminRepository, auth_settings: AuthSettings
    ) -> AdminAuthService:
        """Provide admin account domain service."""
        return AdminAuthService(
            admin_repository=admin_repository, auth_settings=auth_settings
        )
