"""Ingredient matching and validation against the knowledge base."""

from dataclasses import dataclass
from typing import Protocol

from nutriplan.domain.knowledge import Allergen, Ingredient, IngredientCategory, MenuCase
from nutriplan.domain.validation import (
    BatchValidationSummary,
    ErrorCode,
    InvalidIngredient,
    ValidationResult,
    ValidIngredient,
)
from nutriplan.errors import CategoryNotFoundError
from nutriplan.normalization import normalize, split_ingredients


class KnowledgeRepository(Protocol):
    """Read-only access to the ingredient, allergen and menu case catalog."""

    def find_ingredient_by_name(self, name: str) -> Ingredient | None:
        """Return the ingredient whose canonical name equals `name`."""

    def find_ingredient_by_synonym(self, token: str) -> Ingredient | None:
        """Return the ingredient listing `token` among its synonyms."""

    def list_ingredients(self) -> list[Ingredient]:
        """Return every ingredient ordered by name."""

    def list_allergens(self) -> list[Allergen]:
        """Return every allergen ordered by name."""

    def list_menu_cases(self, base_ingredient_id: str) -> list[MenuCase]:
        """Return the menu cases keyed to an ingredient."""

    def list_all_menu_cases(self) -> list[MenuCase]:
        """Return every stored menu case."""

    def find_menu_case_by_name(self, menu_name: str) -> MenuCase | None:
        """Return the case whose normalized menu name equals `menu_name`."""

    def list_menu_cases_by_calories(
        self, min_calories: float, max_calories: float
    ) -> list[MenuCase]:
        """Return the cases whose calories fall within the inclusive range."""


@dataclass
class IngredientMatcher:
    """Resolve normalized tokens to ingredients by exact name, then synonym."""

    repository: KnowledgeRepository

    def match(self, token: str) -> Ingredient | None:
        """Return the matching ingredient or None when the KB has no entry."""
        normalized = normalize(token)
        if not normalized:
            return None
        ingredient = self.repository.find_ingredient_by_name(normalized)
        if ingredient is not None:
            return ingredient
        return self.repository.find_ingredient_by_synonym(normalized)


@dataclass
class IngredientService:
    """Validation and browsing over the knowledge base."""

    repository: KnowledgeRepository
    matcher: IngredientMatcher

    def validate_ingredient(self, text: object) -> ValidationResult:
        """Validate one free-text ingredient name."""
        if not isinstance(text, str):
            return InvalidIngredient(
                original_text="" if text is None else str(text),
                reason=ErrorCode.INVALID_INPUT,
                message="Ingredient must be a string",
            )
        normalized = normalize(text)
        if not normalized:
            return InvalidIngredient(
                original_text=text,
                reason=ErrorCode.EMPTY_INPUT,
                message="Ingredient name must not be empty",
            )
        ingredient = self.matcher.match(normalized)
        if ingredient is None:
            return InvalidIngredient(
                original_text=text,
                reason=ErrorCode.INGREDIENT_NOT_FOUND,
                message=f"Ingredient '{text}' was not found in the knowledge base",
            )
        return ValidIngredient(
            original_text=text,
            ingredient=ingredient,
            resolved_allergens=ingredient.allergen_tags,
            message=_valid_message(ingredient),
        )

    def validate_many(self, texts: object) -> list[ValidationResult]:
        """Validate each entry independently, preserving input order."""
        if not isinstance(texts, list | tuple) or not texts:
            return [
                InvalidIngredient(
                    original_text="",
                    reason=ErrorCode.INVALID_INPUT,
                    message="Provide at least one ingredient",
                )
            ]
        return [self.validate_ingredient(text) for text in texts]

    def validate_description(self, text: object) -> list[ValidationResult]:
        """Split a comma-separated description and validate every token."""
        if not isinstance(text, str):
            return self.validate_many(None)
        tokens = split_ingredients(text)
        if not tokens:
            return [
                InvalidIngredient(
                    original_text=text,
                    reason=ErrorCode.EMPTY_INPUT,
                    message="Ingredient description must not be empty",
                )
            ]
        return self.validate_many(tokens)

    @staticmethod
    def summarize(results: list[ValidationResult]) -> BatchValidationSummary:
        """Count valid and invalid results and merge allergens of the valid ones."""
        merged: set[str] = set()
        valid_count = 0
        for result in results:
            if isinstance(result, ValidIngredient):
                valid_count += 1
                merged.update(result.resolved_allergens)
        return BatchValidationSummary(
            requested_count=len(results),
            valid_count=valid_count,
            invalid_count=len(results) - valid_count,
            merged_allergens=sorted(merged),
        )

    def list_ingredients(self) -> list[Ingredient]:
        return self.repository.list_ingredients()

    def search_ingredients(self, keyword: str | None) -> list[Ingredient]:
        """Return ingredients whose name or a synonym contains the keyword."""
        if not keyword:
            return []
        needle = normalize(keyword)
        if not needle:
            return []
        return [
            ingredient
            for ingredient in self.repository.list_ingredients()
            if needle in ingredient.name
            or any(needle in synonym for synonym in ingredient.synonyms)
        ]

    def list_by_category(self, category: IngredientCategory) -> list[Ingredient]:
        return [
            ingredient
            for ingredient in self.repository.list_ingredients()
            if ingredient.category == category
        ]

    @staticmethod
    def list_categories() -> list[str]:
        return [category.value for category in IngredientCategory]

    @staticmethod
    def resolve_category(raw: str) -> IngredientCategory:
        """Return the category named by `raw`, ignoring case and padding."""
        try:
            return IngredientCategory(normalize(raw))
        except ValueError as exc:
            raise CategoryNotFoundError(f"Unknown category '{raw}'") from exc

    def list_allergens(self) -> list[Allergen]:
        return self.repository.list_allergens()

    def ingredient_has_allergen(self, ingredient_name: str, allergen: str) -> bool:
        """Return True when the resolved ingredient carries the allergen tag."""
        ingredient = self.matcher.match(ingredient_name)
        if ingredient is None:
            return False
        return normalize(allergen) in ingredient.allergen_tags


def _valid_message(ingredient: Ingredient) -> str:
    if ingredient.allergen_tags:
        tags = ", ".join(ingredient.allergen_tags)
        return f"Ingredient '{ingredient.name}' is valid (contains allergens: {tags})"
    return f"Ingredient '{ingredient.name}' is valid (no registered allergens)"
