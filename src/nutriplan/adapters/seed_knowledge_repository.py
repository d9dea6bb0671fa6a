"""In-memory knowledge base loaded from catalog records."""

from dataclasses import dataclass, field

from nutriplan import seed_data
from nutriplan.domain.knowledge import Allergen, Ingredient, MenuCase, parse_category
from nutriplan.errors import KnowledgeBaseError
from nutriplan.normalization import normalize, normalize_terms
from nutriplan.services.ingredients import KnowledgeRepository


@dataclass
class SeedKnowledgeRepository(KnowledgeRepository):
    """Knowledge base held in memory and validated when it is built."""

    allergens: dict[str, Allergen] = field(default_factory=dict)
    ingredients: dict[str, Ingredient] = field(default_factory=dict)
    menu_cases: list[MenuCase] = field(default_factory=list)
    _synonyms: dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for ingredient in self.ingredients.values():
            for synonym in ingredient.synonyms:
                self._synonyms[synonym] = ingredient.name

    @classmethod
    def from_records(
        cls,
        allergens: list[dict[str, str]],
        ingredients: list[dict[str, object]],
        menu_cases: list[dict[str, object]],
    ) -> "SeedKnowledgeRepository":
        """Build a repository, rejecting records that break catalog invariants."""
        allergen_map: dict[str, Allergen] = {}
        for record in allergens:
            name = normalize(record["name"])
            if name in allergen_map:
                raise KnowledgeBaseError(f"Duplicate allergen '{name}'")
            allergen_map[name] = Allergen(
                id=f"allergen-{name}",
                name=name,
                description=record.get("description", ""),
            )

        ingredient_map: dict[str, Ingredient] = {}
        surface_forms: dict[str, str] = {}
        for record in ingredients:
            ingredient = _parse_ingredient(record, allergen_map)
            for form in (ingredient.name, *ingredient.synonyms):
                owner = surface_forms.get(form)
                if owner is not None and owner != ingredient.name:
                    raise KnowledgeBaseError(
                        f"'{form}' is used by both '{owner}' and '{ingredient.name}'"
                    )
                surface_forms[form] = ingredient.name
            if ingredient.name in ingredient_map:
                raise KnowledgeBaseError(f"Duplicate ingredient '{ingredient.name}'")
            ingredient_map[ingredient.name] = ingredient

        cases = []
        for record in menu_cases:
            base_name = normalize(str(record["base"]))
            base = ingredient_map.get(base_name)
            if base is None:
                raise KnowledgeBaseError(
                    f"Menu case '{record['id']}' references unknown '{base_name}'"
                )
            cases.append(
                MenuCase(
                    id=str(record["id"]),
                    base_ingredient_id=base.id,
                    menu_name=str(record["menu_name"]),
                    description=record.get("description"),
                    calories=float(record.get("calories", 0)),
                    protein=record.get("protein"),
                    carbs=record.get("carbs"),
                    fat=record.get("fat"),
                    allergens=base.allergen_tags,
                )
            )

        return cls(allergens=allergen_map, ingredients=ingredient_map, menu_cases=cases)

    @classmethod
    def from_seed(cls) -> "SeedKnowledgeRepository":
        """Build the repository from the bundled catalog."""
        return cls.from_records(
            seed_data.ALLERGENS, seed_data.INGREDIENTS, seed_data.MENU_CASES
        )

    def find_ingredient_by_name(self, name: str) -> Ingredient | None:
        return self.ingredients.get(name)

    def find_ingredient_by_synonym(self, token: str) -> Ingredient | None:
        owner = self._synonyms.get(token)
        if owner is None:
            return None
        return self.ingredients[owner]

    def list_ingredients(self) -> list[Ingredient]:
        return sorted(self.ingredients.values(), key=lambda item: item.name)

    def list_allergens(self) -> list[Allergen]:
        return sorted(self.allergens.values(), key=lambda item: item.name)

    def list_menu_cases(self, base_ingredient_id: str) -> list[MenuCase]:
        return [
            case for case in self.menu_cases if case.base_ingredient_id == base_ingredient_id
        ]

    def list_all_menu_cases(self) -> list[MenuCase]:
        return list(self.menu_cases)

    def find_menu_case_by_name(self, menu_name: str) -> MenuCase | None:
        for case in self.menu_cases:
            if normalize(case.menu_name) == menu_name:
                return case
        return None

    def list_menu_cases_by_calories(
        self, min_calories: float, max_calories: float
    ) -> list[MenuCase]:
        return [
            case
            for case in self.menu_cases
            if min_calories <= case.calories <= max_calories
        ]


def _parse_ingredient(
    record: dict[str, object], allergens: dict[str, Allergen]
) -> Ingredient:
    name = normalize(str(record["name"]))
    category = parse_category(name, record.get("category", ""))
    synonyms = normalize_terms(record.get("synonyms"))
    tags = []
    for value in record.get("allergens") or []:
        tag = normalize(str(value))
        if tag not in allergens:
            raise KnowledgeBaseError(f"Ingredient '{name}' has unknown allergen '{tag}'")
        tags.append(tag)

    return Ingredient(
        id=f"ingredient-{name.replace(' ', '-')}",
        name=name,
        category=category,
        synonyms=tuple(synonyms),
        allergen_tags=tuple(tags),
    )
