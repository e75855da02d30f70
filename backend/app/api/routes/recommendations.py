from fastapi import APIRouter, Body, Depends, status

from app.api.deps import get_auth_context, get_recommendation_generator, get_repositories, require_admin
from app.core.exceptions import ResourceNotFoundError
from app.models.learning_recommendation import LearningRecommendation
from app.repositories import Repositories
from app.schemas.common import Envelope, success
from app.schemas.recommendation import RecommendationComplete, RecommendationCreate, RecommendationOut
from app.services.identity import AuthContext, ensure_self_or_admin, find_user
from app.services.recommendations import RecommendationGenerator

router = APIRouter()


def _get_recommendation(repos: Repositories, recommendation_id: str) -> LearningRecommendation:
    recommendation = repos.recommendations.get(recommendation_id)
    if recommendation is None:
        raise ResourceNotFoundError("Recommendation", message="Recommendation not found")
    return recommendation


@router.get("/user/{user_id}", response_model=Envelope[list[RecommendationOut]])
def list_user_recommendations(
    user_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)
    return success(repos.recommendations.list_for_user(user.id))


@router.get("/user/{user_id}/course/{course_id}", response_model=Envelope[list[RecommendationOut]])
def list_user_course_recommendations(
    user_id: str,
    course_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)
    return success(repos.recommendations.list_for_user(user.id, course_id=course_id))


@router.post("/generate/{user_id}", response_model=Envelope[list[RecommendationOut]])
def generate_recommendations(
    user_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
    generator: RecommendationGenerator = Depends(get_recommendation_generator),
) -> dict:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)
    created = generator.generate(user.id)
    return success(created, message=f"Generated {len(created)} new recommendations")


@router.patch("/{recommendation_id}/complete", response_model=Envelope[RecommendationOut])
def mark_recommendation_completed(
    recommendation_id: str,
    payload: RecommendationComplete | None = Body(default=None),
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    recommendation = _get_recommendation(repos, recommendation_id)
    ensure_self_or_admin(auth, recommendation.user_id)
    completed = payload.completed if payload is not None else True
    return success(repos.recommendations.update(recommendation, {"completed": completed}))


@router.post("", response_model=Envelope[RecommendationOut], status_code=status.HTTP_201_CREATED)
def create_recommendation(
    payload: RecommendationCreate,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    if repos.users.get(payload.user_id) is None:
        raise ResourceNotFoundError("User", message="User not found")
    if repos.courses.get(payload.course_id) is None:
        raise ResourceNotFoundError("Course", message="Course not found")
    if repos.study_resources.get(payload.resource_id) is None:
        raise ResourceNotFoundError("StudyResource", message="Study resource not found")

    recommendation = repos.recommendations.add(
        LearningRecommendation(
            user_id=payload.user_id,
            course_id=payload.course_id,
            resource_id=payload.resource_id,
            reason=payload.reason or "Based on your enrollment",
            priority=payload.priority,
            completed=False,
        )
    )
    return success(recommendation)


@router.delete("/{recommendation_id}", response_model=Envelope[None])
def delete_recommendation(
    recommendation_id: str,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    repos.recommendations.delete(_get_recommendation(repos, recommendation_id))
    return success(message="Recommendation deleted successfully")
