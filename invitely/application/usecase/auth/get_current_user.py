"""Resolve the end user behind a token."""

from uuid import UUID

from pydantic import BaseModel

from invitely.domain.error import NotAuthorizedError, NotFoundError
from invitely.domain.model import User
from invitely.domain.service import JWTService, UserService
from invitely.domain.value import UserId
from invitely.util.jwt import USER_ROLE, JWTError


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token from cookie or bearer header


class GetCurrentUserUseCase:
    """Use case for authenticating end-user requests."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> User:
        """Verify the token and load the user.

        Raises:
            JWTError: If the token is invalid, expired, or its user no longer exists
            NotAuthorizedError: If the token is not a user token
        """
        payload = self.jwt_service.verify_token(request.token)
        if payload.role != USER_ROLE:
            raise NotAuthorizedError("User access required")

        try:
            return await self.user_service.get_by_id(UserId(UUID(payload.sub)))
        except (NotFoundError, ValueError):
            raise JWTError("User account not found")
