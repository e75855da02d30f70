import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_auth_context, get_repositories, require_admin
from app.repositories import Repositories
from app.schemas.common import Envelope, success
from app.schemas.user import RoleUpdate, UserOut
from app.services.identity import AuthContext, ensure_self_or_admin, find_user

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/me", response_model=Envelope[UserOut])
def get_profile(
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    return success(find_user(repos.users, auth.user_id))


@router.get("", response_model=Envelope[list[UserOut]])
def list_users(
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    return success(repos.users.list())


@router.get("/{user_id}", response_model=Envelope[UserOut])
def get_user(
    user_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)
    return success(user)


@router.patch("/{user_id}/role", response_model=Envelope[UserOut])
def update_role(
    user_id: str,
    payload: RoleUpdate,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = repos.users.update(find_user(repos.users, user_id), {"role": payload.role})
    logger.info("User %s changed role of %s to %s", auth.user_id, user.id, user.role.value)
    return success(user)
