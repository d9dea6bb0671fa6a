"""Supabase repository for student allergen profiles."""

from dataclasses import dataclass

from supabase import Client

from nutriplan.adapters.supabase_errors import execute
from nutriplan.domain.allergy import StudentAllergenProfile
from nutriplan.services.allergens import StudentRepository

_STUDENT_COLUMNS = "id, name, custom_allergies, user_allergens(allergen)"


@dataclass
class SupabaseStudentRepository(StudentRepository):
    """Read student profiles from the users table."""

    client: Client

    def list_students(self) -> list[StudentAllergenProfile]:
        """Return all users with the student role."""
        response = execute(
            self.client.table("users")
            .select(_STUDENT_COLUMNS)
            .eq("role", "student")
            .order("name"),
            "list students",
        )
        return [_parse_student(row) for row in response.data or []]

    def get_student(self, student_id: str) -> StudentAllergenProfile | None:
        response = execute(
            self.client.table("users")
            .select(_STUDENT_COLUMNS)
            .eq("id", student_id)
            .limit(1),
            "load student",
        )
        if not response.data:
            return None
        return _parse_student(response.data[0])


def _parse_student(row: dict[str, object]) -> StudentAllergenProfile:
    links = row.get("user_allergens") or []
    allergens = tuple(
        str(link["allergen"])
        for link in links
        if isinstance(link, dict) and link.get("allergen")
    )
    return StudentAllergenProfile(
        student_id=str(row["id"]),
        name=str(row.get("name") or ""),
        allergens=allergens,
        custom_allergies=row.get("custom_allergies"),
    )
