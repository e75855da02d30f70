from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.core.exceptions import ForbiddenError, ResourceNotFoundError, UnauthenticatedError
from app.models.user import User, UserRole
from app.repositories.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def for_user(cls, user: User) -> "AuthContext":
        return cls(user_id=user.id, role=user.role)


def resolve_identity(users: UserRepository, claims: dict[str, Any]) -> User:
    """Map identity provider claims to a local user, provisioning it on first contact."""
    external_id = str(claims.get("sub") or "").strip()
    if not external_id:
        raise UnauthenticatedError("Could not validate credentials")

    user = users.get_by_external_id(external_id)
    if user is not None:
        return user

    email = str(claims.get("email") or "").strip().lower()
    if not email:
        raise UnauthenticatedError("Unknown user and no profile data to provision one")

    user = users.add(
        User(
            external_id=external_id,
            email=email,
            first_name=str(claims.get("first_name") or claims.get("firstName") or ""),
            last_name=str(claims.get("last_name") or claims.get("lastName") or ""),
            role=UserRole.STUDENT,
        )
    )
    logger.info("Provisioned user %s for identity %s", user.id, external_id)
    return user


def find_user(users: UserRepository, reference: str) -> User:
    user = users.get_by_reference(reference)
    if user is None:
        raise ResourceNotFoundError("User", message="User not found")
    return user


def ensure_self_or_admin(auth: AuthContext, user_id: str) -> None:
    if auth.is_admin or auth.user_id == user_id:
        return
    logger.warning("User %s denied access to resources of user %s", auth.user_id, user_id)
    raise ForbiddenError()
