"""Menu case retrieval endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutriplan.api.presenters import (
    case_lookup_view,
    case_retrieval_view,
    case_statistics_view,
    case_view,
)
from nutriplan.services.cases import DEFAULT_CASE_LIMIT

if TYPE_CHECKING:
    from nutriplan.containers import AppContainer

router = APIRouter(prefix="/cases", tags=["cases"])


@router.get("")
async def list_cases(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    cases = container.case_service.list_all_cases()
    return {"total_cases": len(cases), "menus": [case_view(case) for case in cases]}


@router.get("/statistics")
async def case_statistics(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return case_statistics_view(container.case_service.case_statistics())


@router.get("/calories")
async def cases_by_calories(
    request: Request,
    min_calories: float = 0.0,
    max_calories: float = 10_000.0,
    limit: int = DEFAULT_CASE_LIMIT,
) -> dict[str, object]:
    """Return cases within a calorie range, lightest first."""
    container: AppContainer = request.app.state.container
    cases = container.case_service.list_cases_by_calories(
        min_calories, max_calories, limit=limit
    )
    return {
        "min_calories": min_calories,
        "max_calories": max_calories,
        "total_cases": len(cases),
        "menus": [case_view(case) for case in cases],
    }


@router.get("/category/{category}")
async def cases_by_category(
    category: str, request: Request, limit: int = DEFAULT_CASE_LIMIT
) -> dict[str, object]:
    """Return cases whose base ingredient belongs to a category."""
    container: AppContainer = request.app.state.container
    resolved = container.ingredient_service.resolve_category(category)
    cases = container.case_service.list_cases_by_category(resolved, limit=limit)
    return {
        "category": resolved.value,
        "total_cases": len(cases),
        "menus": [case_view(case) for case in cases],
    }


@router.get("/menu/{menu_name}")
async def case_by_menu_name(menu_name: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return case_lookup_view(container.case_service.find_case_by_name(menu_name))


@router.get("/{ingredient}")
async def retrieve_cases(
    ingredient: str, request: Request, limit: int | None = None
) -> dict[str, object]:
    """Return the stored menu cases for a base ingredient."""
    container: AppContainer = request.app.state.container
    result = container.case_service.retrieve_cases(ingredient, limit=limit)
    return case_retrieval_view(result)
