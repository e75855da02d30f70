from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.api.deps import get_auth_context, get_repositories
from app.core.clock import schedule_zone, utc_now
from app.models.exam import Exam
from app.repositories import Repositories
from app.schemas.common import Envelope, success
from app.schemas.exam import ExamOut
from app.schemas.schedule import ScheduleOut
from app.services.calendar_export import build_calendar
from app.services.identity import AuthContext, ensure_self_or_admin, find_user
from app.services.schedule_view import build_schedule, exam_timing

router = APIRouter()


def _user_exams(user_id: str, auth: AuthContext, repos: Repositories) -> tuple[str, list[Exam]]:
    user = find_user(repos.users, user_id)
    ensure_self_or_admin(auth, user.id)
    exams = list(repos.exams.list_for_courses(repos.enrollments.course_ids_for_user(user.id)))
    return user.email.split("@")[0], exams


@router.get("/user/{user_id}", response_model=Envelope[ScheduleOut])
def get_user_schedule(
    user_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    _, exams = _user_exams(user_id, auth, repos)
    now = utc_now()
    zone = schedule_zone()
    view = build_schedule(exams, now=now, zone=zone)

    def scheduled(exam: Exam) -> dict:
        return {
            **ExamOut.model_validate(exam).model_dump(),
            "has_conflict": exam.id in view.conflicting_ids,
            "timing": exam_timing(exam, now, zone),
        }

    next_exam = None
    if view.next_exam is not None and view.countdown is not None:
        next_exam = {"exam": view.next_exam, "countdown": view.countdown}

    return success(
        {
            "days": [{"day": day.day, "exams": [scheduled(exam) for exam in day.exams]} for day in view.days],
            "has_conflicts": view.has_conflicts,
            "conflicts": [{"exam_a": item.exam_a, "exam_b": item.exam_b} for item in view.conflicts],
            "next_exam": next_exam,
        }
    )


@router.get("/user/{user_id}/calendar.ics")
def export_user_calendar(
    user_id: str,
    auth: AuthContext = Depends(get_auth_context),
    repos: Repositories = Depends(get_repositories),
) -> Response:
    username, exams = _user_exams(user_id, auth, repos)
    return Response(
        content=build_calendar(exams),
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{username}-exam-schedule.ics"'},
    )
