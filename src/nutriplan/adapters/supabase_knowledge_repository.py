"""Supabase implementation of the knowledge base."""

from dataclasses import dataclass

from supabase import Client

from nutriplan.adapters.supabase_errors import execute
from nutriplan.domain.knowledge import Allergen, Ingredient, MenuCase, parse_category
from nutriplan.normalization import normalize, normalize_terms
from nutriplan.services.ingredients import KnowledgeRepository

_INGREDIENT_COLUMNS = "id, name, category, synonyms, ingredient_allergens(allergens(name))"
_CASE_COLUMNS = "*, ingredients(ingredient_allergens(allergens(name)))"


@dataclass
class SupabaseKnowledgeRepository(KnowledgeRepository):
    """Supabase-backed ingredient, allergen and menu case catalog."""

    client: Client

    def find_ingredient_by_name(self, name: str) -> Ingredient | None:
        """Return the ingredient whose stored name normalizes to `name`."""
        response = execute(
            self.client.table("ingredients")
            .select(_INGREDIENT_COLUMNS)
            .ilike("name", name),
            "look up ingredient",
        )
        for row in response.data or []:
            if normalize(str(row.get("name", ""))) == name:
                return _parse_ingredient(row)
        return None

    def find_ingredient_by_synonym(self, token: str) -> Ingredient | None:
        """Return the first ingredient listing the token among its synonyms.

        The synonyms column is comma-separated text, so the pattern match only
        narrows the rows and each candidate is split before comparing.
        """
        response = execute(
            self.client.table("ingredients")
            .select(_INGREDIENT_COLUMNS)
            .ilike("synonyms", f"%{token}%")
            .order("name"),
            "look up ingredient synonym",
        )
        for row in response.data or []:
            if token in normalize_terms(row.get("synonyms")):
                return _parse_ingredient(row)
        return None

    def list_ingredients(self) -> list[Ingredient]:
        response = execute(
            self.client.table("ingredients").select(_INGREDIENT_COLUMNS).order("name"),
            "list ingredients",
        )
        return [_parse_ingredient(row) for row in response.data or []]

    def list_allergens(self) -> list[Allergen]:
        response = execute(
            self.client.table("allergens").select("*").order("name"),
            "list allergens",
        )
        return [
            Allergen(
                id=str(row["id"]),
                name=normalize(str(row["name"])),
                description=str(row.get("description") or ""),
            )
            for row in response.data or []
        ]

    def list_menu_cases(self, base_ingredient_id: str) -> list[MenuCase]:
        response = execute(
            self.client.table("menu_cases")
            .select(_CASE_COLUMNS)
            .eq("base_ingredient_id", base_ingredient_id)
            .order("menu_name"),
            "list menu cases",
        )
        return [_parse_case(row) for row in response.data or []]

    def list_all_menu_cases(self) -> list[MenuCase]:
        response = execute(
            self.client.table("menu_cases").select(_CASE_COLUMNS).order("menu_name"),
            "list menu cases",
        )
        return [_parse_case(row) for row in response.data or []]

    def find_menu_case_by_name(self, menu_name: str) -> MenuCase | None:
        """Return the case whose menu name matches ignoring case and padding."""
        response = execute(
            self.client.table("menu_cases")
            .select(_CASE_COLUMNS)
            .ilike("menu_name", menu_name)
            .order("id"),
            "look up menu case",
        )
        for row in response.data or []:
            if normalize(str(row.get("menu_name", ""))) == menu_name:
                return _parse_case(row)
        return None

    def list_menu_cases_by_calories(
        self, min_calories: float, max_calories: float
    ) -> list[MenuCase]:
        response = execute(
            self.client.table("menu_cases")
            .select(_CASE_COLUMNS)
            .gte("calories", min_calories)
            .lte("calories", max_calories)
            .order("calories"),
            "list menu cases by calories",
        )
        return [_parse_case(row) for row in response.data or []]


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse an ingredient row with embedded allergen links."""
    name = normalize(str(row.get("name", "")))
    category = parse_category(name, row.get("category", ""))
    synonyms = normalize_terms(row.get("synonyms"))
    return Ingredient(
        id=str(row["id"]),
        name=name,
        category=category,
        synonyms=tuple(synonyms),
        allergen_tags=_allergen_names(row.get("ingredient_allergens")),
    )


def _allergen_names(links: object) -> tuple[str, ...]:
    tags = []
    for link in links or []:
        allergen = link.get("allergens") if isinstance(link, dict) else None
        if allergen and allergen.get("name"):
            tags.append(normalize(str(allergen["name"])))
    return tuple(tags)


def _parse_case(row: dict[str, object]) -> MenuCase:
    base = row.get("ingredients")
    links = base.get("ingredient_allergens") if isinstance(base, dict) else None
    return MenuCase(
        id=str(row["id"]),
        base_ingredient_id=str(row["base_ingredient_id"]),
        menu_name=str(row.get("menu_name", "")),
        description=row.get("description"),
        calories=float(row.get("calories") or 0.0),
        protein=row.get("protein"),
        carbs=row.get("carbs"),
        fat=row.get("fat"),
        allergens=_allergen_names(links),
    )
