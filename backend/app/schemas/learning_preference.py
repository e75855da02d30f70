from pydantic import Field

from app.models.study_resource import ResourceType
from app.schemas.common import ApiModel


class LearningPreferenceUpsert(ApiModel):
    preferred_type: ResourceType
    study_duration: int | None = Field(default=None, ge=1, le=24 * 60)


class LearningPreferenceOut(ApiModel):
    id: str
    user_id: str
    preferred_type: ResourceType
    study_duration: int
