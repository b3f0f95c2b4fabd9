from fastapi import APIRouter, Depends, HTTPException, status

from models.schemas import (
    CheckConflictInput,
    CheckConflictOutput,
    CheckRoomAvailabilityInput,
    CheckRoomAvailabilityOutput,
    SuggestImprovementsInput,
    SuggestImprovementsOutput,
)
from routers.dependencies import get_schedule_advisor
from service.schedule_advisor import AdvisorError, ScheduleAdvisor

# Create a router instance
router = APIRouter()

# Handlers are plain functions: the hosted advisor blocks on network I/O,
# so FastAPI runs them in its threadpool.


@router.post("/advisor/check-conflict", response_model=CheckConflictOutput)
def check_schedule_conflict(request: CheckConflictInput,
                            advisor: ScheduleAdvisor = Depends(get_schedule_advisor)):
    """
    Check a candidate class against the current schedule.

    Faculty, room and section clashes are reported; a faculty of "NF"
    (No Faculty) never causes a faculty clash.
    """
    try:
        return advisor.check_conflict(request)
    except AdvisorError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.post("/advisor/suggest-improvements", response_model=SuggestImprovementsOutput)
def suggest_schedule_improvements(request: SuggestImprovementsInput,
                                  advisor: ScheduleAdvisor = Depends(get_schedule_advisor)):
    """Suggest improvements for a schedule, with a rationale for each."""
    try:
        return advisor.suggest_improvements(request)
    except AdvisorError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.post("/advisor/check-room-availability", response_model=CheckRoomAvailabilityOutput)
def check_room_availability(request: CheckRoomAvailabilityInput,
                            advisor: ScheduleAdvisor = Depends(get_schedule_advisor)):
    """
    Report each room as Available, Unavailable or Partially Available over
    a time range, on a date or on a set of weekdays.
    """
    try:
        return advisor.check_room_availability(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AdvisorError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
