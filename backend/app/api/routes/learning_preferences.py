import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_auth_context, get_repositories
from app.core.config import get_settings
from app.core.exceptions import ResourceNotFoundError
from app.models.learning_preference import LearningPreference
from app.repositories import Repositories
from app.schemas.common import Envelope, success
from app.schemas.learning_preference import LearningPreferenceOut, LearningPreferenceUpsert
from app.services.identity import AuthContext, ensure_self_or_admin, find_user

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/user/{user_id}", response_model=Envelope[list[LearningPreferenceOut]])
def list_user_preferences(
    user_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)
    return success(repos.preferences.list_for_user(user.id))


@router.post("/user/{user_id}", response_model=Envelope[LearningPreferenceOut])
def upsert_user_preference(
    user_id: str,
    payload: LearningPreferenceUpsert,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)

    existing = repos.preferences.first_for_user(user.id)
    if existing is not None:
        preference = repos.preferences.update(
            existing,
            {
                "preferred_type": payload.preferred_type,
                "study_duration": payload.study_duration or existing.study_duration,
            },
        )
    else:
        preference = repos.preferences.add(
            LearningPreference(
                user_id=user.id,
                preferred_type=payload.preferred_type,
                study_duration=payload.study_duration or get_settings().default_study_duration_minutes,
            )
        )
    logger.info("Learning preference for user %s set to %s", user.id, preference.preferred_type.value)
    return success(preference)


@router.delete("/{preference_id}", response_model=Envelope[None])
def delete_preference(
    preference_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    preference = repos.preferences.get(preference_id)
    if preference is None:
        raise ResourceNotFoundError("LearningPreference", message="Learning preference not found")
    ensure_self_or_admin(auth, preference.user_id)
    repos.preferences.delete(preference)
    return success(message="Learning preference deleted successfully")
