"""Request models for the HTTP API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ValidateIngredientRequest(BaseModel):
    """Single ingredient validation request."""

    ingredient: Any = None


class ValidateBatchRequest(BaseModel):
    """Batch validation by explicit list or comma-separated description."""

    ingredients: Any = None
    description: str | None = None


class AllergyCheckRequest(BaseModel):
    """Allergy check with explicit student allergen tags."""

    student_allergens: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    menu_allergens: list[str] = Field(default_factory=list)


class StudentAllergyCheckRequest(BaseModel):
    """Allergy check against a stored student profile."""

    ingredients: list[str] = Field(default_factory=list)
    menu_allergens: list[str] = Field(default_factory=list)


class DetectAllergensRequest(BaseModel):
    """Allergen detection for a list of ingredient names."""

    ingredients: list[str] = Field(min_length=1)


class SubmitChoiceRequest(BaseModel):
    """A student's menu choice for one day."""

    week_start: datetime
    day: str
    choice: str
