"""Student menu choice endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutriplan.api.presenters import choice_view
from nutriplan.api.schemas import SubmitChoiceRequest

if TYPE_CHECKING:
    from nutriplan.containers import AppContainer

router = APIRouter(prefix="/choices", tags=["choices"])


@router.get("/status")
async def choice_status(request: Request) -> dict[str, object]:
    """Return whether selection is open and the current deadline."""
    container: AppContainer = request.app.state.container
    status = container.choice_service.choice_status()
    return {
        "can_select": status.can_select,
        "deadline": status.deadline.isoformat(),
        "current_time": status.current_time.isoformat(),
        "upcoming_week_start": status.upcoming_week_start.isoformat(),
    }


@router.get("/{student_id}")
async def list_choices(student_id: str, request: Request) -> dict[str, object]:
    """Return a student's choices for the next published week."""
    container: AppContainer = request.app.state.container
    upcoming = container.choice_service.list_upcoming_choices(student_id)
    if upcoming.week_start is None:
        return {
            "success": False,
            "message": "No upcoming menu found",
            "choices": [],
        }
    return {
        "success": True,
        "week_start": upcoming.week_start.isoformat(),
        "choices": [choice_view(choice) for choice in upcoming.choices],
    }


@router.put("/{student_id}")
async def submit_choice(
    student_id: str, payload: SubmitChoiceRequest, request: Request
) -> dict[str, object]:
    """Save a student's choice while the selection window is open."""
    container: AppContainer = request.app.state.container
    saved = container.choice_service.submit_choice(
        student_id=student_id,
        week_start=payload.week_start,
        day=payload.day,
        choice=payload.choice,
    )
    return {"success": True, "message": "Choice saved", "choice": choice_view(saved)}
