"""Allergen reasoning over ingredient tokens and declared menu allergens."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from nutriplan.domain.allergy import (
    AllergenDetection,
    AllergenUsage,
    AllergyCheckResult,
    DetectedIngredient,
    StudentAllergenProfile,
)
from nutriplan.domain.menus import MenuItem
from nutriplan.errors import StudentNotFoundError
from nutriplan.normalization import normalize_terms, split_ingredients
from nutriplan.services.ingredients import IngredientMatcher, KnowledgeRepository

_logger = logging.getLogger(__name__)

EXAMPLES_PER_ALLERGEN = 3


class StudentRepository(Protocol):
    """Persistence interface for student allergen profiles."""

    def list_students(self) -> list[StudentAllergenProfile]:
        """Return every student with their allergen profile."""

    def get_student(self, student_id: str) -> StudentAllergenProfile | None:
        """Return one student's allergen profile, if present."""


@dataclass
class AllergenService:
    """Match a student's allergens against ingredients and menu declarations."""

    matcher: IngredientMatcher
    knowledge_repository: KnowledgeRepository
    student_repository: StudentRepository

    def check_allergy(
        self,
        student_allergens: Iterable[str] | str,
        ingredient_tokens: Iterable[str] | str,
        menu_declared_allergens: Iterable[str] | str,
    ) -> AllergyCheckResult:
        """Return the allergens of the student that the menu appears to contain.

        Ingredient tokens are matched with a loose keyword rule: a token
        matches a student tag when either string contains the other. Tokens
        that resolve to a knowledge base ingredient also contribute that
        ingredient's allergen tags.
        """
        student_tags = normalize_terms(student_allergens)
        student_set = set(student_tags)
        matched: dict[str, None] = {}

        for allergen in normalize_terms(menu_declared_allergens):
            if allergen in student_set:
                matched.setdefault(allergen, None)

        for token in normalize_terms(ingredient_tokens):
            for allergen in student_tags:
                if allergen in token or token in allergen:
                    matched.setdefault(allergen, None)
            ingredient = self.matcher.match(token)
            if ingredient is None:
                continue
            for tag in ingredient.allergen_tags:
                if tag in student_set:
                    matched.setdefault(tag, None)

        return _build_result(list(matched))

    def check_student_allergy(
        self,
        student_id: str,
        ingredient_tokens: Iterable[str] | str,
        menu_declared_allergens: Iterable[str] | str,
    ) -> AllergyCheckResult:
        """Check ingredients against the stored profile of a student."""
        profile = self.student_repository.get_student(student_id)
        if profile is None:
            raise StudentNotFoundError(f"Student '{student_id}' was not found")
        result = self.check_allergy(
            profile.tags(), ingredient_tokens, menu_declared_allergens
        )
        if result.has_allergy:
            _logger.info(
                "Allergy match: student=%s allergens=%s",
                student_id,
                result.matched_allergens,
            )
        return result

    def check_menu_item(
        self, profile: StudentAllergenProfile, menu_item: MenuItem
    ) -> AllergyCheckResult:
        """Check a published menu item against a student's profile."""
        return self.check_allergy(
            profile.tags(), menu_item.ingredients, menu_item.allergens
        )

    def detect_allergens(
        self, ingredient_tokens: Iterable[str] | str
    ) -> AllergenDetection:
        """Resolve each token and merge the allergens of the ones found."""
        detected = []
        merged: set[str] = set()
        if isinstance(ingredient_tokens, str):
            ingredient_tokens = split_ingredients(ingredient_tokens)
        for text in ingredient_tokens:
            ingredient = self.matcher.match(text)
            if ingredient is None:
                detected.append(
                    DetectedIngredient(text=text, found=False, name=text, allergens=())
                )
                continue
            merged.update(ingredient.allergen_tags)
            detected.append(
                DetectedIngredient(
                    text=text,
                    found=True,
                    name=ingredient.name,
                    allergens=ingredient.allergen_tags,
                )
            )
        return AllergenDetection(ingredients=detected, merged_allergens=sorted(merged))

    def allergen_statistics(self) -> list[AllergenUsage]:
        """Return how many ingredients carry each known allergen."""
        ingredients = self.knowledge_repository.list_ingredients()
        usage = []
        for allergen in self.knowledge_repository.list_allergens():
            carriers = [
                ingredient.name
                for ingredient in ingredients
                if allergen.name in ingredient.allergen_tags
            ]
            usage.append(
                AllergenUsage(
                    allergen=allergen.name,
                    ingredient_count=len(carriers),
                    examples=carriers[:EXAMPLES_PER_ALLERGEN],
                )
            )
        return usage


def _build_result(matched: list[str]) -> AllergyCheckResult:
    if matched:
        return AllergyCheckResult(
            has_allergy=True,
            matched_allergens=matched,
            severity="high",
            recommendation="Choose the sehat menu, which is safe for your allergies",
        )
    return AllergyCheckResult(
        has_allergy=False,
        matched_allergens=[],
        severity="none",
        recommendation="This menu is safe for you",
    )
