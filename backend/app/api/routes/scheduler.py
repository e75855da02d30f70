from fastapi import APIRouter, Depends

from app.api.deps import get_scheduler, require_admin
from app.schemas.common import Envelope, success
from app.schemas.scheduler import ConflictCheckOut, ExamDraftIn, RescheduleIn, SchedulerSaveIn, SchedulerSaveOut
from app.services.identity import AuthContext
from app.services.scheduler import ExamDraft, ExamScheduler, SaveOutcome, conflict_warning

router = APIRouter()


def _draft(payload: ExamDraftIn) -> ExamDraft:
    return ExamDraft(
        course_id=payload.course_id,
        room_id=payload.room_id,
        start_time=payload.start_time,
        end_time=payload.end_time,
        status=payload.status,
    )


def _outcome_response(outcome: SaveOutcome, *, saved_message: str) -> dict:
    data = {
        "saved": outcome.saved,
        "requires_confirmation": outcome.requires_confirmation,
        "exam": outcome.exam,
        "conflicts": outcome.conflicts,
    }
    message = conflict_warning(len(outcome.conflicts)) if outcome.requires_confirmation else saved_message
    return success(data, message=message)


@router.post("/exams/check", response_model=Envelope[ConflictCheckOut])
def check_exam_conflicts(
    payload: ExamDraftIn,
    exam_id: str | None = None,
    auth: AuthContext = Depends(require_admin),
    scheduler: ExamScheduler = Depends(get_scheduler),
) -> dict:
    draft = _draft(payload)
    scheduler.validate(draft)
    conflicts = scheduler.find_conflicts(draft, exclude_id=exam_id)
    message = conflict_warning(len(conflicts)) if conflicts else None
    return success({"has_conflicts": bool(conflicts), "conflicts": conflicts, "message": message})


@router.post("/exams", response_model=Envelope[SchedulerSaveOut])
def schedule_exam(
    payload: SchedulerSaveIn,
    auth: AuthContext = Depends(require_admin),
    scheduler: ExamScheduler = Depends(get_scheduler),
) -> dict:
    outcome = scheduler.save(_draft(payload), confirm=lambda _conflicts: payload.confirm_conflicts)
    return _outcome_response(outcome, saved_message="Exam created successfully")


@router.put("/exams/{exam_id}", response_model=Envelope[SchedulerSaveOut])
def update_scheduled_exam(
    exam_id: str,
    payload: SchedulerSaveIn,
    auth: AuthContext = Depends(require_admin),
    scheduler: ExamScheduler = Depends(get_scheduler),
) -> dict:
    outcome = scheduler.save(
        _draft(payload),
        exam_id=exam_id,
        confirm=lambda _conflicts: payload.confirm_conflicts,
    )
    return _outcome_response(outcome, saved_message="Exam updated successfully")


@router.post("/exams/{exam_id}/reschedule", response_model=Envelope[SchedulerSaveOut])
def drag_reschedule_exam(
    exam_id: str,
    payload: RescheduleIn,
    auth: AuthContext = Depends(require_admin),
    scheduler: ExamScheduler = Depends(get_scheduler),
) -> dict:
    """Move an exam onto a day and grid slot.

    A drop is a save like any other: landing on an occupied room returns
    ``saved=false`` with the clashing exams until ``confirmConflicts`` is sent.
    """
    outcome = scheduler.reschedule(
        exam_id,
        payload.day,
        payload.slot_index,
        confirm=lambda _conflicts: payload.confirm_conflicts,
    )
    return _outcome_response(outcome, saved_message="Exam rescheduled successfully")
