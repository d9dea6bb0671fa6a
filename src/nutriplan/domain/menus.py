"""Domain models for weekly menus and student menu choices."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, StrEnum


class SchoolDay(StrEnum):
    """School days a weekly menu covers, Monday to Friday."""

    SENIN = "Senin"
    SELASA = "Selasa"
    RABU = "Rabu"
    KAMIS = "Kamis"
    JUMAT = "Jumat"


class MenuChoice(StrEnum):
    """Menu variants a student can pick for a day."""

    HARIAN = "harian"
    SEHAT = "sehat"


class CreateOutcome(Enum):
    """Result of inserting a choice under the per-day uniqueness constraint."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


@dataclass(frozen=True)
class MenuItem:
    """A single day's item in a published weekly menu."""

    id: str
    day: SchoolDay
    menu_name: str
    ingredients: tuple[str, ...] = ()
    allergens: tuple[str, ...] = ()


@dataclass(frozen=True)
class WeeklyMenu:
    """Published menu plan for one school week."""

    id: str
    week_start: datetime
    week_end: datetime
    is_active: bool
    items: tuple[MenuItem, ...] = ()


@dataclass(frozen=True)
class StudentMenuChoice:
    """A student's menu choice for one day of a week."""

    id: str
    student_id: str
    week_start: datetime
    day: SchoolDay
    choice: MenuChoice
    is_auto_assigned: bool


@dataclass(frozen=True)
class WindowState:
    """Whether choices are open right now and when the window closes."""

    can_select: bool
    deadline: datetime


@dataclass
class AutoAssignmentReport:
    """Counters collected during one auto-assignment run."""

    status: str
    week_start: datetime | None = None
    students: int = 0
    created: int = 0
    skipped: int = 0
    conflicts: int = 0
    failed: int = 0
    assignments: list[tuple[str, SchoolDay, MenuChoice]] = field(
        default_factory=list
    )
