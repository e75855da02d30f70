from fastapi import APIRouter, Depends, status

from app.api.deps import get_repositories, require_admin
from app.core.exceptions import ResourceNotFoundError
from app.models.study_resource import StudyResource
from app.repositories import Repositories
from app.schemas.common import Envelope, success
from app.schemas.study_resource import StudyResourceCreate, StudyResourceOut, StudyResourceUpdate
from app.services.identity import AuthContext

router = APIRouter()


def _get_resource(repos: Repositories, resource_id: str) -> StudyResource:
    resource = repos.study_resources.get(resource_id)
    if resource is None:
        raise ResourceNotFoundError("StudyResource", message="Study resource not found")
    return resource


def _ensure_course(repos: Repositories, course_id: str) -> None:
    if repos.courses.get(course_id) is None:
        raise ResourceNotFoundError("Course", message="Course not found")


@router.get("", response_model=Envelope[list[StudyResourceOut]])
def list_study_resources(repos: Repositories = Depends(get_repositories)) -> dict:
    return success(repos.study_resources.list())


@router.get("/course/{course_id}", response_model=Envelope[list[StudyResourceOut]])
def list_course_study_resources(course_id: str, repos: Repositories = Depends(get_repositories)) -> dict:
    return success(repos.study_resources.list_for_course(course_id))


@router.get("/{resource_id}", response_model=Envelope[StudyResourceOut])
def get_study_resource(resource_id: str, repos: Repositories = Depends(get_repositories)) -> dict:
    return success(_get_resource(repos, resource_id))


@router.post("", response_model=Envelope[StudyResourceOut], status_code=status.HTTP_201_CREATED)
def create_study_resource(
    payload: StudyResourceCreate,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    _ensure_course(repos, payload.course_id)
    return success(repos.study_resources.add(StudyResource(**payload.model_dump())))


@router.put("/{resource_id}", response_model=Envelope[StudyResourceOut])
def update_study_resource(
    resource_id: str,
    payload: StudyResourceUpdate,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    resource = _get_resource(repos, resource_id)
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "course_id" in data:
        _ensure_course(repos, data["course_id"])
    return success(repos.study_resources.update(resource, data))


@router.delete("/{resource_id}", response_model=Envelope[None])
def delete_study_resource(
    resource_id: str,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    repos.study_resources.delete(_get_resource(repos, resource_id))
    return success(message="Study resource deleted successfully")
