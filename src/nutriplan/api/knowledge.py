"""Knowledge base endpoints: ingredient validation and browsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutriplan.api.presenters import ingredient_view, validation_view
from nutriplan.api.schemas import ValidateBatchRequest, ValidateIngredientRequest

if TYPE_CHECKING:
    from nutriplan.containers import AppContainer

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


@router.post("/validate")
async def validate_ingredient(
    payload: ValidateIngredientRequest, request: Request
) -> dict[str, object]:
    """Validate one ingredient name against the knowledge base."""
    container: AppContainer = request.app.state.container
    result = container.ingredient_service.validate_ingredient(payload.ingredient)
    return validation_view(result)


@router.post("/validate-batch")
async def validate_batch(
    payload: ValidateBatchRequest, request: Request
) -> dict[str, object]:
    """Validate a list of ingredients or a comma-separated description."""
    container: AppContainer = request.app.state.container
    service = container.ingredient_service
    if payload.ingredients is None and payload.description is not None:
        results = service.validate_description(payload.description)
    else:
        results = service.validate_many(payload.ingredients)
    summary = service.summarize(results)
    return {
        "success": summary.valid_count > 0,
        "requested_count": summary.requested_count,
        "valid_count": summary.valid_count,
        "invalid_count": summary.invalid_count,
        "merged_allergens": summary.merged_allergens,
        "results": [validation_view(result) for result in results],
    }


@router.get("/ingredients")
async def list_ingredients(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    ingredients = container.ingredient_service.list_ingredients()
    return {
        "total": len(ingredients),
        "ingredients": [ingredient_view(item) for item in ingredients],
    }


@router.get("/ingredients/search")
async def search_ingredients(request: Request, q: str = "") -> dict[str, object]:
    """Search ingredients by a substring of the name or any synonym."""
    container: AppContainer = request.app.state.container
    ingredients = container.ingredient_service.search_ingredients(q)
    return {
        "found": bool(ingredients),
        "total": len(ingredients),
        "ingredients": [ingredient_view(item) for item in ingredients],
    }


@router.get("/categories")
async def list_categories(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"categories": container.ingredient_service.list_categories()}


@router.get("/categories/{category}")
async def list_by_category(category: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    service = container.ingredient_service
    resolved = service.resolve_category(category)
    ingredients = service.list_by_category(resolved)
    return {
        "category": resolved.value,
        "total": len(ingredients),
        "ingredients": [ingredient_view(item) for item in ingredients],
    }


@router.get("/allergens")
async def list_allergens(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    allergens = container.ingredient_service.list_allergens()
    return {
        "allergens": [
            {"name": allergen.name, "description": allergen.description}
            for allergen in allergens
        ]
    }


@router.get("/allergens/statistics")
async def allergen_statistics(request: Request) -> dict[str, object]:
    """Return how many ingredients carry each allergen."""
    container: AppContainer = request.app.state.container
    usage = container.allergen_service.allergen_statistics()
    return {
        "total_allergens": len(usage),
        "ingredient_allergen_mappings": sum(item.ingredient_count for item in usage),
        "allergens": [
            {
                "allergen": item.allergen,
                "ingredient_count": item.ingredient_count,
                "examples": item.examples,
            }
            for item in usage
        ],
    }
