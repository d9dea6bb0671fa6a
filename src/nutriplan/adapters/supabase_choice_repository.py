"""Supabase repository for student menu choices.

The ``student_menu_choices`` table carries a unique constraint on
``(student_id, week_start, day)``.
"""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from nutriplan.adapters.supabase_errors import execute, is_unique_violation
from nutriplan.domain.menus import (
    CreateOutcome,
    MenuChoice,
    SchoolDay,
    StudentMenuChoice,
)
from nutriplan.errors import StorageError
from nutriplan.services.choices import ChoiceRepository

_TABLE = "student_menu_choices"
_CONFLICT_KEY = "student_id,week_start,day"


@dataclass
class SupabaseChoiceRepository(ChoiceRepository):
    """Supabase-backed menu choice persistence."""

    client: Client

    def exists(self, student_id: str, week_start: datetime, day: SchoolDay) -> bool:
        response = execute(
            self.client.table(_TABLE)
            .select("id")
            .eq("student_id", student_id)
            .eq("week_start", week_start.isoformat())
            .eq("day", day.value)
            .limit(1),
            "check menu choice",
        )
        return bool(response.data)

    def create(  # noqa: PLR0913
        self,
        student_id: str,
        week_start: datetime,
        day: SchoolDay,
        choice: MenuChoice,
        is_auto_assigned: bool,
    ) -> CreateOutcome:
        """Insert a choice; a unique violation means the key is already taken."""
        payload = _payload(student_id, week_start, day, choice, is_auto_assigned)
        try:
            response = self.client.table(_TABLE).insert(payload).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                return CreateOutcome.ALREADY_EXISTS
            raise StorageError(f"Failed to create menu choice: {exc.message}") from exc
        if not response.data:
            raise StorageError("Failed to create menu choice")
        return CreateOutcome.CREATED

    def upsert(  # noqa: PLR0913
        self,
        student_id: str,
        week_start: datetime,
        day: SchoolDay,
        choice: MenuChoice,
        is_auto_assigned: bool,
    ) -> StudentMenuChoice:
        payload = _payload(student_id, week_start, day, choice, is_auto_assigned)
        response = execute(
            self.client.table(_TABLE).upsert(payload, on_conflict=_CONFLICT_KEY),
            "save menu choice",
        )
        if not response.data:
            raise StorageError("Failed to save menu choice")
        return _parse_choice(response.data[0])

    def list_for_student(
        self, student_id: str, week_start: datetime
    ) -> list[StudentMenuChoice]:
        response = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("student_id", student_id)
            .eq("week_start", week_start.isoformat()),
            "list menu choices",
        )
        choices = [_parse_choice(row) for row in response.data or []]
        order = list(SchoolDay)
        return sorted(choices, key=lambda item: order.index(item.day))


def _payload(
    student_id: str,
    week_start: datetime,
    day: SchoolDay,
    choice: MenuChoice,
    is_auto_assigned: bool,
) -> dict[str, object]:
    return {
        "student_id": student_id,
        "week_start": week_start.isoformat(),
        "day": day.value,
        "choice": choice.value,
        "is_auto_assigned": is_auto_assigned,
    }


def _parse_choice(row: dict[str, object]) -> StudentMenuChoice:
    return StudentMenuChoice(
        id=str(row["id"]),
        student_id=str(row["student_id"]),
        week_start=datetime.fromisoformat(str(row["week_start"])),
        day=SchoolDay(str(row["day"])),
        choice=MenuChoice(str(row["choice"])),
        is_auto_assigned=bool(row.get("is_auto_assigned", False)),
    )
