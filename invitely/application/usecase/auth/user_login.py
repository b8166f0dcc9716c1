"""End-user login use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from invitely.adapter.error import ProviderError
from invitely.domain.error import InvalidCredentialsError
from invitely.domain.model import User
from invitely.domain.service import IdentityProvider, JWTService, UserService


class UserView(BaseModel):
    """End user as returned to themselves."""

    id: str
    email: str
    name: str | None
    avatar_url: str | None
    reseller_id: str | None
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            avatar_url=user.avatar_url,
            reseller_id=str(user.reseller_id) if user.reseller_id else None,
            created_at=user.created_at,
        )


class UserLoginRequest(BaseModel):
    """Google sign-in request."""

    id_token: str  # Google ID token obtained by the frontend


class UserLoginResponse(BaseModel):
    """Login response."""

    token: str
    user: UserView


class UserLoginUseCase:
    """Use case for end-user login with a Google ID token."""

    def __init__(
        self,
        identity_provider: IdentityProvider,
        user_service: UserService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize user login use case.

        Args:
            identity_provider: Verifies Google ID tokens
            user_service: User domain service
            jwt_service: JWT token domain service
        """
        self.identity_provider = identity_provider
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: UserLoginRequest) -> UserLoginResponse:
        """Execute user login.

        Steps:
        1. Verify the ID token with the identity provider
        2. Find the user by email, creating the account on first login
        3. Issue a user token

        Raises:
            InvalidCredentialsError: If the provider rejects the token
        """
        try:
            identity = await self.identity_provider.verify_id_token(request.id_token)
        except ProviderError as e:
            logfire.warn("Identity token rejected", error=str(e))
            raise InvalidCredentialsError("Invalid Google credentials") from e

        with logfire.span("user_login.execute", email=identity.email):
            user = await self.user_service.get_or_create(
                email=identity.email,
                name=identity.name,
                avatar_url=identity.avatar_url,
            )
            token = self.jwt_service.create_user_token(user)
            logfire.info("User logged in", user_id=str(user.id))
            return UserLoginResponse(token=token, user=UserView.from_domain(user))
