"""Allergen check endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutriplan.api.presenters import allergy_view, detection_view
from nutriplan.api.schemas import (
    AllergyCheckRequest,
    DetectAllergensRequest,
    StudentAllergyCheckRequest,
)

if TYPE_CHECKING:
    from nutriplan.containers import AppContainer

router = APIRouter(prefix="/allergens", tags=["allergens"])


@router.post("/check")
async def check_allergy(
    payload: AllergyCheckRequest, request: Request
) -> dict[str, object]:
    """Check ingredients and declared allergens against explicit student tags."""
    container: AppContainer = request.app.state.container
    result = container.allergen_service.check_allergy(
        payload.student_allergens, payload.ingredients, payload.menu_allergens
    )
    return {"success": True, **allergy_view(result)}


@router.post("/check/{student_id}")
async def check_student_allergy(
    student_id: str, payload: StudentAllergyCheckRequest, request: Request
) -> dict[str, object]:
    """Check ingredients against a stored student allergen profile."""
    container: AppContainer = request.app.state.container
    result = container.allergen_service.check_student_allergy(
        student_id, payload.ingredients, payload.menu_allergens
    )
    return {"success": True, **allergy_view(result)}


@router.post("/detect")
async def detect_allergens(
    payload: DetectAllergensRequest, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    result = container.allergen_service.detect_allergens(payload.ingredients)
    return detection_view(result)
