"""Case-based retrieval of menu exemplars keyed by base ingredient."""

from collections import Counter
from dataclasses import dataclass, field

from nutriplan.domain.knowledge import Ingredient, IngredientCategory, MenuCase
from nutriplan.domain.validation import ErrorCode
from nutriplan.errors import InvalidRangeError
from nutriplan.normalization import normalize
from nutriplan.services.ingredients import IngredientMatcher, KnowledgeRepository

DEFAULT_CASE_LIMIT = 10
MAX_CASE_LIMIT = 50


@dataclass(frozen=True)
class CaseRetrievalResult:
    """Menu cases found for a requested base ingredient."""

    requested: str
    found: bool
    message: str
    ingredient: Ingredient | None = None
    cases: list[MenuCase] = field(default_factory=list)
    error: ErrorCode | None = None


@dataclass(frozen=True)
class CaseLookupResult:
    """One menu case looked up by its menu name."""

    requested: str
    found: bool
    message: str
    case: MenuCase | None = None
    error: ErrorCode | None = None


@dataclass(frozen=True)
class CaseStatistics:
    total_menus: int
    total_ingredients: int
    average_calories: int
    min_calories: float
    max_calories: float
    menus_by_category: dict[str, int]


@dataclass
class CaseService:
    """Exact-key lookup of stored menu cases."""

    repository: KnowledgeRepository
    matcher: IngredientMatcher

    def retrieve_cases(
        self, base_ingredient_name: object, limit: int | None = None
    ) -> CaseRetrievalResult:
        """Return the stored cases for the ingredient the name resolves to."""
        if not isinstance(base_ingredient_name, str):
            return CaseRetrievalResult(
                requested="",
                found=False,
                message="Ingredient name must be a string",
                error=ErrorCode.INVALID_INPUT,
            )
        if not normalize(base_ingredient_name):
            return CaseRetrievalResult(
                requested=base_ingredient_name,
                found=False,
                message="Ingredient name must not be empty",
                error=ErrorCode.EMPTY_INPUT,
            )
        ingredient = self.matcher.match(base_ingredient_name)
        if ingredient is None:
            return CaseRetrievalResult(
                requested=base_ingredient_name,
                found=False,
                message=(
                    f"Ingredient '{base_ingredient_name}' is not in the knowledge base"
                ),
                error=ErrorCode.INGREDIENT_NOT_FOUND,
            )
        cases = _ordered(self.repository.list_menu_cases(ingredient.id))
        if limit is not None:
            cases = cases[: max(limit, 0)]
        if not cases:
            message = f"No menu cases are on file for '{ingredient.name}'"
        else:
            message = f"Found {len(cases)} menu case(s) based on '{ingredient.name}'"
        return CaseRetrievalResult(
            requested=base_ingredient_name,
            found=True,
            message=message,
            ingredient=ingredient,
            cases=cases,
        )

    def find_case_by_name(self, menu_name: object) -> CaseLookupResult:
        """Return the case whose menu name matches, ignoring case and padding."""
        if not isinstance(menu_name, str):
            return CaseLookupResult(
                requested="",
                found=False,
                message="Menu name must be a string",
                error=ErrorCode.INVALID_INPUT,
            )
        needle = normalize(menu_name)
        if not needle:
            return CaseLookupResult(
                requested=menu_name,
                found=False,
                message="Menu name must not be empty",
                error=ErrorCode.EMPTY_INPUT,
            )
        case = self.repository.find_menu_case_by_name(needle)
        if case is None:
            return CaseLookupResult(
                requested=menu_name,
                found=False,
                message=f"Menu '{menu_name}' is not on file",
                error=ErrorCode.MENU_NOT_FOUND,
            )
        return CaseLookupResult(
            requested=menu_name,
            found=True,
            message=f"Found menu '{case.menu_name}'",
            case=case,
        )

    def list_all_cases(self) -> list[MenuCase]:
        return _ordered(self.repository.list_all_menu_cases())

    def list_cases_by_category(
        self, category: IngredientCategory, limit: int = DEFAULT_CASE_LIMIT
    ) -> list[MenuCase]:
        """Return cases whose base ingredient belongs to the category."""
        base_ids = {
            ingredient.id
            for ingredient in self.repository.list_ingredients()
            if ingredient.category == category
        }
        cases = [
            case
            for case in self.repository.list_all_menu_cases()
            if case.base_ingredient_id in base_ids
        ]
        return _ordered(cases)[: _capped(limit)]

    def list_cases_by_calories(
        self,
        min_calories: float,
        max_calories: float,
        limit: int = DEFAULT_CASE_LIMIT,
    ) -> list[MenuCase]:
        """Return cases within the inclusive calorie range, lightest first."""
        if min_calories > max_calories:
            raise InvalidRangeError(
                f"Minimum calories {min_calories} exceed maximum {max_calories}"
            )
        cases = self.repository.list_menu_cases_by_calories(min_calories, max_calories)
        ordered = sorted(
            cases, key=lambda case: (case.calories, case.menu_name, case.id)
        )
        return ordered[: _capped(limit)]

    def case_statistics(self) -> CaseStatistics:
        """Summarize the stored cases by calories and base ingredient category."""
        cases = self.repository.list_all_menu_cases()
        categories = {
            ingredient.id: ingredient.category.value
            for ingredient in self.repository.list_ingredients()
        }
        calories = [case.calories for case in cases]
        per_category = Counter(
            categories[case.base_ingredient_id]
            for case in cases
            if case.base_ingredient_id in categories
        )
        return CaseStatistics(
            total_menus=len(cases),
            total_ingredients=len({case.base_ingredient_id for case in cases}),
            average_calories=round(sum(calories) / len(calories)) if calories else 0,
            min_calories=min(calories, default=0.0),
            max_calories=max(calories, default=0.0),
            menus_by_category=dict(sorted(per_category.items())),
        )


def _ordered(cases: list[MenuCase]) -> list[MenuCase]:
    return sorted(cases, key=lambda case: (case.menu_name, case.id))


def _capped(limit: int) -> int:
    return min(max(limit, 0), MAX_CASE_LIMIT)
