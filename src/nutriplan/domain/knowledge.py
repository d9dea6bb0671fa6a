"""Domain models for the ingredient and allergen knowledge base."""

from dataclasses import dataclass
from enum import StrEnum

from nutriplan.errors import KnowledgeBaseError


class IngredientCategory(StrEnum):
    """Closed set of ingredient categories."""

    PROTEIN = "protein"
    CARB = "carb"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    DAIRY = "dairy"
    SOY = "soy"
    SEAFOOD = "seafood"
    GLUTEN = "gluten"
    MISC = "misc"


@dataclass(frozen=True)
class Allergen:
    """Reference allergen tag."""

    id: str
    name: str
    description: str


@dataclass(frozen=True)
class Ingredient:
    """Canonical ingredient entry with synonyms and allergen tags."""

    id: str
    name: str
    category: IngredientCategory
    synonyms: tuple[str, ...] = ()
    allergen_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class MenuCase:
    """Previously approved menu keyed by its base ingredient."""

    id: str
    base_ingredient_id: str
    menu_name: str
    description: str | None
    calories: float
    protein: str | None
    carbs: str | None
    fat: str | None
    allergens: tuple[str, ...] = ()


def parse_category(ingredient_name: str, raw: object) -> IngredientCategory:
    """Return the category for a stored value, rejecting values outside the enum."""
    try:
        return IngredientCategory(str(raw))
    except ValueError as exc:
        raise KnowledgeBaseError(
            f"Ingredient '{ingredient_name}' has unknown category '{raw}'"
        ) from exc
