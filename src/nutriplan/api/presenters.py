"""JSON-shaped views of core results."""

from nutriplan.domain.allergy import AllergenDetection, AllergyCheckResult
from nutriplan.domain.knowledge import Ingredient, MenuCase
from nutriplan.domain.menus import AutoAssignmentReport, StudentMenuChoice
from nutriplan.domain.validation import ValidationResult, ValidIngredient
from nutriplan.services.cases import (
    CaseLookupResult,
    CaseRetrievalResult,
    CaseStatistics,
)


def ingredient_view(ingredient: Ingredient) -> dict[str, object]:
    return {
        "id": ingredient.id,
        "name": ingredient.name,
        "category": ingredient.category.value,
        "synonyms": list(ingredient.synonyms),
        "allergens": list(ingredient.allergen_tags),
    }


def validation_view(result: ValidationResult) -> dict[str, object]:
    if isinstance(result, ValidIngredient):
        return {
            "is_valid": True,
            "ingredient_name": result.original_text,
            "ingredient": ingredient_view(result.ingredient),
            "allergens": list(result.resolved_allergens),
            "message": result.message,
        }
    return {
        "is_valid": False,
        "ingredient_name": result.original_text,
        "allergens": [],
        "message": result.message,
        "error": result.reason.value,
    }


def allergy_view(result: AllergyCheckResult) -> dict[str, object]:
    return {
        "has_allergy": result.has_allergy,
        "matched_allergens": result.matched_allergens,
        "severity": result.severity,
        "recommendation": result.recommendation,
    }


def detection_view(result: AllergenDetection) -> dict[str, object]:
    return {
        "ingredients": [
            {
                "name": item.name,
                "found": item.found,
                "allergens": list(item.allergens),
            }
            for item in result.ingredients
        ],
        "merged_allergens": result.merged_allergens,
        "unique_allergen_count": len(result.merged_allergens),
    }


def case_view(case: MenuCase) -> dict[str, object]:
    return {
        "id": case.id,
        "menu_name": case.menu_name,
        "description": case.description,
        "calories": case.calories,
        "protein": case.protein,
        "carbs": case.carbs,
        "fat": case.fat,
        "base_ingredient_id": case.base_ingredient_id,
        "allergens": list(case.allergens),
    }


def case_retrieval_view(result: CaseRetrievalResult) -> dict[str, object]:
    payload: dict[str, object] = {
        "found": result.found,
        "requested_ingredient": result.requested,
        "found_ingredient": result.ingredient.name if result.ingredient else None,
        "total_cases": len(result.cases),
        "menus": [case_view(case) for case in result.cases],
        "message": result.message,
    }
    if result.error is not None:
        payload["error"] = result.error.value
    return payload


def case_lookup_view(result: CaseLookupResult) -> dict[str, object]:
    payload: dict[str, object] = {
        "found": result.found,
        "requested_menu": result.requested,
        "menu": case_view(result.case) if result.case else None,
        "message": result.message,
    }
    if result.error is not None:
        payload["error"] = result.error.value
    return payload


def case_statistics_view(stats: CaseStatistics) -> dict[str, object]:
    return {
        "total_menus": stats.total_menus,
        "total_ingredients": stats.total_ingredients,
        "average_calories": stats.average_calories,
        "calorie_range": {"min": stats.min_calories, "max": stats.max_calories},
        "menus_by_category": stats.menus_by_category,
    }


def choice_view(choice: StudentMenuChoice) -> dict[str, object]:
    return {
        "id": choice.id,
        "student_id": choice.student_id,
        "week_start": choice.week_start.isoformat(),
        "day": choice.day.value,
        "choice": choice.choice.value,
        "is_auto_assigned": choice.is_auto_assigned,
    }


def report_view(report: AutoAssignmentReport) -> dict[str, object]:
    return {
        "status": report.status,
        "week_start": report.week_start.isoformat() if report.week_start else None,
        "students": report.students,
        "created": report.created,
        "skipped": report.skipped,
        "conflicts": report.conflicts,
        "failed": report.failed,
        "assignments": [
            {"student_id": student_id, "day": day.value, "choice": choice.value}
            for student_id, day, choice in report.assignments
        ],
    }
