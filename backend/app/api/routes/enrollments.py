import logging

from fastapi import APIRouter, Depends, status

from app.api.deps import get_auth_context, get_repositories
from app.core.exceptions import ConflictError, ResourceNotFoundError
from app.models.enrollment import Enrollment
from app.repositories import Repositories
from app.schemas.common import Envelope, success
from app.schemas.course import CourseOut
from app.schemas.enrollment import EnrollmentCreate, EnrollmentOut
from app.services.identity import AuthContext, ensure_self_or_admin, find_user

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/available-courses", response_model=Envelope[list[CourseOut]])
def list_available_courses(repos: Repositories = Depends(get_repositories)) -> dict:
    return success(repos.courses.list_by_code())


@router.get("/user/{user_id}", response_model=Envelope[list[EnrollmentOut]])
def list_user_enrollments(
    user_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)
    return success(repos.enrollments.list_for_user(user.id))


@router.post("/user/{user_id}", response_model=Envelope[EnrollmentOut], status_code=status.HTTP_201_CREATED)
def enroll_user(
    user_id: str,
    payload: EnrollmentCreate,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)
    if repos.courses.get(payload.course_id) is None:
        raise ResourceNotFoundError("Course", message="Course not found")

    existing = repos.enrollments.find(user.id, payload.course_id, payload.semester)
    if existing is not None:
        raise ConflictError(
            "User is already enrolled in this course for the specified semester",
            details={"enrollment_id": existing.id},
        )

    enrollment = repos.enrollments.add(
        Enrollment(user_id=user.id, course_id=payload.course_id, semester=payload.semester)
    )
    logger.info("User %s enrolled in course %s for %s", user.id, payload.course_id, payload.semester)
    return success(enrollment)


@router.delete("/{enrollment_id}", response_model=Envelope[None])
def unenroll(
    enrollment_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    enrollment = repos.enrollments.get(enrollment_id)
    if enrollment is None:
        raise ResourceNotFoundError("Enrollment", message="Enrollment not found")
    ensure_self_or_admin(auth, enrollment.user_id)
    repos.enrollments.delete(enrollment)
    logger.info("Enrollment %s removed", enrollment_id)
    return success(message="User has been unenrolled from the course")
