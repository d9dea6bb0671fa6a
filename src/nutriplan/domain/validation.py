"""Result types for ingredient validation."""

from dataclasses import dataclass
from enum import StrEnum

from nutriplan.domain.knowledge import Ingredient


class ErrorCode(StrEnum):
    """Machine-readable outcome codes shared by the core services."""

    INVALID_INPUT = "INVALID_INPUT"
    EMPTY_INPUT = "EMPTY_INPUT"
    INGREDIENT_NOT_FOUND = "INGREDIENT_NOT_FOUND"
    MENU_NOT_FOUND = "MENU_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class ValidIngredient:
    """Input text that resolved to a knowledge base ingredient."""

    original_text: str
    ingredient: Ingredient
    resolved_allergens: tuple[str, ...]
    message: str

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True)
class InvalidIngredient:
    """Input text that could not be resolved."""

    original_text: str
    reason: ErrorCode
    message: str

    @property
    def is_valid(self) -> bool:
        return False


ValidationResult = ValidIngredient | InvalidIngredient


@dataclass(frozen=True)
class BatchValidationSummary:
    """Counts and merged allergens for a batch of validation results."""

    requested_count: int
    valid_count: int
    invalid_count: int
    merged_allergens: list[str]
