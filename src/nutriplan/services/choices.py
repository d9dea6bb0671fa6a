"""Student menu choices gated by the selection window."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from nutriplan.domain.menus import (
    CreateOutcome,
    MenuChoice,
    SchoolDay,
    StudentMenuChoice,
    WeeklyMenu,
)
from nutriplan.errors import InvalidChoiceError, SelectionClosedError
from nutriplan.services.selection import Clock, SelectionWindowPolicy


class ChoiceRepository(Protocol):
    """Persistence interface for student menu choices."""

    def exists(self, student_id: str, week_start: datetime, day: SchoolDay) -> bool:
        """Return True when a choice is stored for the key."""

    def create(  # noqa: PLR0913
        self,
        student_id: str,
        week_start: datetime,
        day: SchoolDay,
        choice: MenuChoice,
        is_auto_assigned: bool,
    ) -> CreateOutcome:
        """Insert a choice, reporting a uniqueness conflict as ALREADY_EXISTS."""

    def upsert(  # noqa: PLR0913
        self,
        student_id: str,
        week_start: datetime,
        day: SchoolDay,
        choice: MenuChoice,
        is_auto_assigned: bool,
    ) -> StudentMenuChoice:
        """Insert or replace the choice for the key and return it."""

    def list_for_student(
        self, student_id: str, week_start: datetime
    ) -> list[StudentMenuChoice]:
        """Return a student's choices for a week."""


class MenuRepository(Protocol):
    """Read access to published weekly menus."""

    def find_upcoming_active_menu(self, after: datetime) -> WeeklyMenu | None:
        """Return the nearest active menu whose week starts after `after`."""


@dataclass(frozen=True)
class ChoiceStatus:
    """Selection window state at a given time."""

    can_select: bool
    deadline: datetime
    current_time: datetime
    upcoming_week_start: datetime


@dataclass(frozen=True)
class UpcomingChoices:
    """A student's choices for the next published week."""

    week_start: datetime | None
    choices: list[StudentMenuChoice] = field(default_factory=list)


@dataclass
class StudentChoiceService:
    """Application service for student-initiated menu choices."""

    repository: ChoiceRepository
    menu_repository: MenuRepository
    policy: SelectionWindowPolicy
    clock: Clock

    def choice_status(self, now: datetime | None = None) -> ChoiceStatus:
        current = now or self.clock.now()
        state = self.policy.window_state(current)
        return ChoiceStatus(
            can_select=state.can_select,
            deadline=state.deadline,
            current_time=current,
            upcoming_week_start=self.policy.upcoming_week_start(current),
        )

    def submit_choice(  # noqa: PLR0913
        self,
        student_id: str,
        week_start: datetime,
        day: str,
        choice: str,
        now: datetime | None = None,
    ) -> StudentMenuChoice:
        """Store a student's choice for the next published week.

        The window must be open and `week_start` must name the week of the
        upcoming active menu.
        """
        current = now or self.clock.now()
        state = self.policy.window_state(current)
        if not state.can_select:
            raise SelectionClosedError(
                "Menu selection is only allowed before the weekly deadline"
            )
        try:
            school_day = SchoolDay(day)
            menu_choice = MenuChoice(choice)
        except ValueError as exc:
            raise InvalidChoiceError(f"Unknown day or choice: {day}/{choice}") from exc
        menu = self.menu_repository.find_upcoming_active_menu(current)
        if menu is None:
            raise InvalidChoiceError("No upcoming menu is open for selection")
        if self.policy.localize(week_start) != menu.week_start:
            raise InvalidChoiceError(
                f"Choices can only be made for the week of {menu.week_start.date()}"
            )
        return self.repository.upsert(
            student_id=student_id,
            week_start=menu.week_start,
            day=school_day,
            choice=menu_choice,
            is_auto_assigned=False,
        )

    def list_upcoming_choices(
        self, student_id: str, now: datetime | None = None
    ) -> UpcomingChoices:
        """Return the student's choices for the next active menu week."""
        menu = self.menu_repository.find_upcoming_active_menu(now or self.clock.now())
        if menu is None:
            return UpcomingChoices(week_start=None)
        return UpcomingChoices(
            week_start=menu.week_start,
            choices=self.repository.list_for_student(student_id, menu.week_start),
        )
