from collections.abc import Callable, Generator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenError, UnauthenticatedError
from app.core.security import decode_identity_token
from app.db.session import SessionLocal
from app.models.user import UserRole
from app.repositories import Repositories
from app.services.identity import AuthContext, resolve_identity
from app.services.recommendations import RecommendationGenerator
from app.services.scheduler import ExamScheduler

security = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_repositories(db: Session = Depends(get_db)) -> Repositories:
    return Repositories.for_session(db)


def get_auth_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    repos: Repositories = Depends(get_repositories),
) -> AuthContext:
    if credentials is None:
        raise UnauthenticatedError()
    try:
        claims = decode_identity_token(credentials.credentials)
    except JWTError as exc:
        raise UnauthenticatedError("Could not validate credentials") from exc
    user = resolve_identity(repos.users, claims)
    return AuthContext.for_user(user)


def require_roles(*roles: UserRole) -> Callable[[AuthContext], AuthContext]:
    allowed_roles = set(roles)

    def role_checker(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if auth.role not in allowed_roles:
            raise ForbiddenError()
        return auth

    return role_checker


require_admin = require_roles(UserRole.ADMIN)


def get_scheduler(repos: Repositories = Depends(get_repositories)) -> ExamScheduler:
    return ExamScheduler(repos)


def get_recommendation_generator(repos: Repositories = Depends(get_repositories)) -> RecommendationGenerator:
    return RecommendationGenerator(repos)
