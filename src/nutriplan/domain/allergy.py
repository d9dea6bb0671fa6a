"""Domain models for allergen reasoning."""

from dataclasses import dataclass
from typing import Literal

from nutriplan.normalization import normalize, split_ingredients

Severity = Literal["high", "none"]


@dataclass(frozen=True)
class StudentAllergenProfile:
    """A student's structured allergen tags plus free-text custom allergies."""

    student_id: str
    name: str
    allergens: tuple[str, ...] = ()
    custom_allergies: str | None = None

    def tags(self) -> list[str]:
        """Return the ordered, de-duplicated union of both allergen sources."""
        combined = [normalize(tag) for tag in self.allergens]
        if self.custom_allergies:
            combined.extend(split_ingredients(self.custom_allergies))
        return list(dict.fromkeys(tag for tag in combined if tag))

    @property
    def has_allergies(self) -> bool:
        return bool(self.tags())


@dataclass(frozen=True)
class AllergyCheckResult:
    """Outcome of checking ingredients and declared allergens for a student."""

    has_allergy: bool
    matched_allergens: list[str]
    severity: Severity
    recommendation: str


@dataclass(frozen=True)
class DetectedIngredient:
    """Allergens resolved for a single ingredient token."""

    text: str
    found: bool
    name: str
    allergens: tuple[str, ...]


@dataclass(frozen=True)
class AllergenDetection:
    """Per-token allergen detection with the merged allergen set."""

    ingredients: list[DetectedIngredient]
    merged_allergens: list[str]


@dataclass(frozen=True)
class AllergenUsage:
    """How many ingredients carry an allergen, with a few examples."""

    allergen: str
    ingredient_count: int
    examples: list[str]
