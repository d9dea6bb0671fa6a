"""Tests for menu case retrieval."""

import pytest

from nutriplan.domain.knowledge import IngredientCategory
from nutriplan.domain.validation import ErrorCode
from nutriplan.errors import InvalidRangeError
from nutriplan.services.cases import MAX_CASE_LIMIT


def test_known_ingredient_without_cases(case_service) -> None:
    result = case_service.retrieve_cases("tahu")

    assert result.found
    assert result.cases == []
    assert result.ingredient.name == "tahu"
    assert "No menu cases" in result.message


def test_unknown_ingredient_is_distinct_from_no_cases(case_service) -> None:
    result = case_service.retrieve_cases("mobil")

    assert not result.found
    assert result.error is ErrorCode.INGREDIENT_NOT_FOUND
    assert result.ingredient is None


def test_cases_are_ordered_by_menu_name(case_service) -> None:
    result = case_service.retrieve_cases("Dada Ayam")

    assert result.found
    assert result.ingredient.name == "ayam"
    assert [case.menu_name for case in result.cases] == [
        "Ayam Bakar Madu",
        "Ayam Goreng Krispy",
        "Soto Ayam",
    ]


def test_limit_truncates_cases(case_service) -> None:
    result = case_service.retrieve_cases("ayam", limit=2)

    assert len(result.cases) == 2
    assert result.cases[0].menu_name == "Ayam Bakar Madu"


def test_invalid_and_empty_names(case_service) -> None:
    assert case_service.retrieve_cases(None).error is ErrorCode.INVALID_INPUT
    assert case_service.retrieve_cases("  ").error is ErrorCode.EMPTY_INPUT


def test_list_all_cases(case_service) -> None:
    names = [case.menu_name for case in case_service.list_all_cases()]

    assert len(names) == 6
    assert names == sorted(names)


def test_cases_carry_base_ingredient_allergens(case_service) -> None:
    fish = case_service.retrieve_cases("ikan nila").cases
    chicken = case_service.retrieve_cases("ayam").cases

    assert [case.allergens for case in fish] == [("fish",)]
    assert all(case.allergens == () for case in chicken)


def test_find_case_by_menu_name(case_service) -> None:
    result = case_service.find_case_by_name("  soto AYAM ")

    assert result.found
    assert result.case.id == "case-soto-ayam"
    assert result.error is None


def test_find_case_by_menu_name_errors(case_service) -> None:
    assert case_service.find_case_by_name(42).error is ErrorCode.INVALID_INPUT
    assert case_service.find_case_by_name(" ").error is ErrorCode.EMPTY_INPUT
    missing = case_service.find_case_by_name("Nasi Uduk")
    assert not missing.found
    assert missing.error is ErrorCode.MENU_NOT_FOUND


def test_list_cases_by_category(case_service) -> None:
    seafood = case_service.list_cases_by_category(IngredientCategory.SEAFOOD)
    protein = case_service.list_cases_by_category(IngredientCategory.PROTEIN, limit=2)

    assert [case.menu_name for case in seafood] == [
        "Ikan Goreng Kecap",
        "Tongkol Balado",
    ]
    assert [case.menu_name for case in protein] == [
        "Ayam Bakar Madu",
        "Ayam Goreng Krispy",
    ]
    assert case_service.list_cases_by_category(IngredientCategory.FRUIT) == []


def test_list_cases_by_calories_lightest_first(case_service) -> None:
    cases = case_service.list_cases_by_calories(600, 650)

    assert [case.calories for case in cases] == [600.0, 620.0, 650.0]
    assert len(case_service.list_cases_by_calories(0, 10_000, limit=2)) == 2


def test_case_limits_are_capped(case_service, monkeypatch) -> None:
    monkeypatch.setattr("nutriplan.services.cases.MAX_CASE_LIMIT", 3)

    assert MAX_CASE_LIMIT == 50
    assert len(case_service.list_cases_by_calories(0, 10_000, limit=500)) == 3
    assert case_service.list_cases_by_calories(0, 10_000, limit=-1) == []


def test_list_cases_by_calories_rejects_inverted_range(case_service) -> None:
    with pytest.raises(InvalidRangeError) as exc_info:
        case_service.list_cases_by_calories(700, 600)

    assert exc_info.value.http_status == 400


def test_case_statistics(case_service) -> None:
    stats = case_service.case_statistics()

    assert stats.total_menus == 6
    assert stats.total_ingredients == 4
    assert stats.average_calories == 645
    assert (stats.min_calories, stats.max_calories) == (580.0, 720.0)
    assert stats.menus_by_category == {"protein": 4, "seafood": 2}
