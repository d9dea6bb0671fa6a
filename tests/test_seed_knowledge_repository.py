"""Tests for the bundled knowledge base and its load-time checks."""

import pytest

from nutriplan.adapters.seed_knowledge_repository import SeedKnowledgeRepository
from nutriplan.errors import KnowledgeBaseError

ALLERGENS = [{"name": "soy", "description": "Soybeans"}]


def test_seed_catalog_loads(knowledge_repository) -> None:
    allergens = [allergen.name for allergen in knowledge_repository.list_allergens()]
    ingredients = knowledge_repository.list_ingredients()

    assert len(allergens) == 8
    assert allergens == sorted(allergens)
    assert [item.name for item in ingredients] == sorted(
        item.name for item in ingredients
    )
    assert knowledge_repository.find_ingredient_by_name("tahu").allergen_tags == (
        "soy",
    )
    assert knowledge_repository.find_ingredient_by_synonym("kol").name == "kubis"


def test_seed_cases_reference_known_ingredients(knowledge_repository) -> None:
    ids = {item.id for item in knowledge_repository.list_ingredients()}

    cases = knowledge_repository.list_all_menu_cases()

    assert cases
    assert all(case.base_ingredient_id in ids for case in cases)


def test_unknown_category_is_rejected() -> None:
    with pytest.raises(KnowledgeBaseError, match="unknown category"):
        SeedKnowledgeRepository.from_records(
            ALLERGENS,
            [{"name": "tahu", "category": "beans", "allergens": ["soy"]}],
            [],
        )


def test_synonym_shared_by_two_ingredients_is_rejected() -> None:
    with pytest.raises(KnowledgeBaseError, match="used by both"):
        SeedKnowledgeRepository.from_records(
            ALLERGENS,
            [
                {"name": "tahu", "category": "soy", "synonyms": "tofu"},
                {"name": "tahu sutra", "category": "soy", "synonyms": "tofu"},
            ],
            [],
        )


def test_unknown_allergen_is_rejected() -> None:
    with pytest.raises(KnowledgeBaseError, match="unknown allergen"):
        SeedKnowledgeRepository.from_records(
            ALLERGENS,
            [{"name": "udang", "category": "seafood", "allergens": ["shellfish"]}],
            [],
        )


def test_case_with_unknown_base_is_rejected() -> None:
    with pytest.raises(KnowledgeBaseError, match="unknown"):
        SeedKnowledgeRepository.from_records(
            ALLERGENS,
            [{"name": "tahu", "category": "soy"}],
            [{"id": "case-1", "base": "ayam", "menu_name": "Ayam Bakar"}],
        )
