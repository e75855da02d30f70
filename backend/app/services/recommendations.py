from __future__ import annotations

import logging
from collections.abc import Sequence

from app.core.exceptions import InvalidStateError, ResourceNotFoundError
from app.models.learning_preference import LearningPreference
from app.models.learning_recommendation import LearningRecommendation
from app.models.study_resource import ResourceType, StudyResource
from app.repositories import Repositories

logger = logging.getLogger(__name__)

DEFAULT_PREFERRED_TYPE = ResourceType.VIDEO
PREFERRED_TYPE_BOOST = 10


def resolve_preferred_type(preferences: Sequence[LearningPreference]) -> ResourceType:
    if preferences:
        return preferences[0].preferred_type
    return DEFAULT_PREFERRED_TYPE


def score_resource(resource: StudyResource, preferred_type: ResourceType) -> int:
    priority = 0
    if resource.type == preferred_type:
        priority += PREFERRED_TYPE_BOOST
    return priority


class RecommendationGenerator:
    """Turns a user's enrollments and preferences into new recommendations.

    Generation is additive: resources already recommended to the user are
    skipped, so a second run with no new resources yields an empty list.
    """

    def __init__(self, repos: Repositories) -> None:
        self.repos = repos

    def generate(self, user_id: str) -> list[LearningRecommendation]:
        user = self.repos.users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", message="User not found")

        course_ids = self.repos.enrollments.course_ids_for_user(user.id)
        if not course_ids:
            raise InvalidStateError("User is not enrolled in any course")

        resources = self.repos.study_resources.list_for_courses(course_ids)
        if not resources:
            raise ResourceNotFoundError("StudyResource", message="No study resources found for enrolled courses")

        preferred_type = resolve_preferred_type(self.repos.preferences.list_for_user(user.id))
        already_recommended = self.repos.recommendations.resource_ids_for_user(user.id)

        candidates: list[LearningRecommendation] = []
        for resource in resources:
            if resource.id in already_recommended:
                continue
            already_recommended.add(resource.id)
            candidates.append(
                LearningRecommendation(
                    user_id=user.id,
                    course_id=resource.course_id,
                    resource_id=resource.id,
                    reason=f"Recommended based on your enrollment in {resource.course.name}",
                    priority=score_resource(resource, preferred_type),
                    completed=False,
                )
            )

        created = self.repos.recommendations.add_many(candidates) if candidates else []
        logger.info(
            "Generated %d new recommendation(s) for user %s (preferred type %s)",
            len(created),
            user.id,
            preferred_type.value,
        )
        return created
