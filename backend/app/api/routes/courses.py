from fastapi import APIRouter, Depends, status

from app.api.deps import get_repositories, require_admin
from app.core.exceptions import ConflictError, ResourceNotFoundError
from app.models.course import Course
from app.repositories import Repositories
from app.schemas.common import Envelope, success
from app.schemas.course import CourseCreate, CourseOut
from app.services.identity import AuthContext

router = APIRouter()


@router.get("", response_model=Envelope[list[CourseOut]])
def list_courses(repos: Repositories = Depends(get_repositories)) -> dict:
    return success(repos.courses.list_by_code())


@router.get("/{course_id}", response_model=Envelope[CourseOut])
def get_course(course_id: str, repos: Repositories = Depends(get_repositories)) -> dict:
    course = repos.courses.get(course_id)
    if course is None:
        raise ResourceNotFoundError("Course", message="Course not found")
    return success(course)


@router.post("", response_model=Envelope[CourseOut], status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseCreate,
    auth: AuthContext = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    if repos.courses.get_by_code(payload.code) is not None:
        raise ConflictError("Course code already exists")
    return success(repos.courses.add(Course(**payload.model_dump())))
