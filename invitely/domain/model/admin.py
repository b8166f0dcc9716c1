"""Admin operator account.

Admins are separate from end users and log in with email and password.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from invitely.domain.model.common import DomainModel, utcnow
from invitely.domain.value import AdminId


class AdminUser(DomainModel):
    """Administrative operator.

    ``password_hash`` never leaves the domain layer.
    """

    id: AdminId
    email: str = Field(min_length=3, max_length=255)
    name: str = Field(min_length=2, max_length=200)
    password_hash: str = Field(repr=False)
    role: Literal["admin"] = "admin"
    is_active: bool = True
    last_login_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
