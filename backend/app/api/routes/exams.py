from fastapi import APIRouter, Depends, status

from app.api.deps import get_auth_context, get_repositories, get_scheduler, require_admin
from app.core.exceptions import ResourceNotFoundError
from app.repositories import Repositories
from app.schemas.common import Envelope, success
from app.schemas.exam import ExamCreate, ExamOut, ExamUpdate
from app.services.identity import AuthContext, ensure_self_or_admin, find_user
from app.services.scheduler import ExamDraft, ExamScheduler

router = APIRouter()


@router.get("", response_model=Envelope[list[ExamOut]])
def list_exams(repos: Repositories = Depends(get_repositories)) -> dict:
    return success(repos.exams.list())


@router.get("/course/{course_id}", response_model=Envelope[list[ExamOut]])
def list_course_exams(course_id: str, repos: Repositories = Depends(get_repositories)) -> dict:
    return success(repos.exams.list_for_course(course_id))


@router.get("/user/{user_id}", response_model=Envelope[list[ExamOut]])
def list_user_exams(
    user_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)
    course_ids = repos.enrollments.course_ids_for_user(user.id)
    return success(repos.exams.list_for_courses(course_ids))


@router.get("/{exam_id}", response_model=Envelope[ExamOut])
def get_exam(exam_id: str, repos: Repositories = Depends(get_repositories)) -> dict:
    exam = repos.exams.get(exam_id)
    if exam is None:
        raise ResourceNotFoundError("Exam", message="Exam not found")
    return success(exam)


@router.post("", response_model=Envelope[ExamOut], status_code=status.HTTP_201_CREATED)
def create_exam(
    payload: ExamCreate,
    auth: AuthContext = Depends(require_admin),
    scheduler: ExamScheduler = Depends(get_scheduler),
) -> dict:
    draft = ExamDraft(**payload.model_dump())
    outcome = scheduler.save(draft, require_room=False, check_conflicts=False)
    return success(outcome.exam)


@router.put("/{exam_id}", response_model=Envelope[ExamOut])
def update_exam(
    exam_id: str,
    payload: ExamUpdate,
    auth: AuthContext = Depends(require_admin),
    scheduler: ExamScheduler = Depends(get_scheduler),
) -> dict:
    draft = ExamDraft.from_exam(scheduler.get_exam(exam_id)).merged(payload.model_dump(exclude_unset=True))
    outcome = scheduler.save(draft, exam_id=exam_id, require_room=False, check_conflicts=False)
    return success(outcome.exam)


@router.delete("/{exam_id}", response_model=Envelope[None])
def delete_exam(
    exam_id: str,
    auth: AuthContext = Depends(require_admin),
    scheduler: ExamScheduler = Depends(get_scheduler),
) -> dict:
    scheduler.delete(exam_id)
    return success(message="Exam deleted successfully")
