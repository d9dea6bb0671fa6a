"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from itertools import count
from zoneinfo import ZoneInfo

import pytest

from nutriplan.adapters.seed_knowledge_repository import SeedKnowledgeRepository
from nutriplan.config import Settings
from nutriplan.containers import AppContainer
from nutriplan.domain.allergy import StudentAllergenProfile
from nutriplan.domain.menus import (
    CreateOutcome,
    MenuChoice,
    SchoolDay,
    StudentMenuChoice,
    WeeklyMenu,
)
from nutriplan.errors import StorageError
from nutriplan.services.allergens import AllergenService, StudentRepository
from nutriplan.services.auto_assignment import AutoAssignmentService
from nutriplan.services.cases import CaseService
from nutriplan.services.choices import (
    ChoiceRepository,
    MenuRepository,
    StudentChoiceService,
)
from nutriplan.services.ingredients import IngredientMatcher, IngredientService
from nutriplan.services.scheduler import AutoAssignmentScheduler
from nutriplan.services.selection import Clock, SelectionWindowPolicy

JAKARTA = ZoneInfo("Asia/Jakarta")

# Friday 2024-06-07, one hour before the cutoff.
FRIDAY_AFTERNOON = datetime(2024, 6, 7, 16, 0, tzinfo=JAKARTA)
NEXT_MONDAY = datetime(2024, 6, 10, tzinfo=JAKARTA)


@dataclass
class FixedClock(Clock):
    """Clock frozen at a settable instant."""

    current: datetime = FRIDAY_AFTERNOON

    def now(self) -> datetime:
        return self.current


@dataclass
class InMemoryStudentRepository(StudentRepository):
    """In-memory student profiles for tests."""

    students: dict[str, StudentAllergenProfile] = field(default_factory=dict)

    def add(
        self,
        student_id: str,
        allergens: tuple[str, ...] = (),
        custom_allergies: str | None = None,
    ) -> StudentAllergenProfile:
        profile = StudentAllergenProfile(
            student_id=student_id,
            name=student_id.title(),
            allergens=allergens,
            custom_allergies=custom_allergies,
        )
        self.students[student_id] = profile
        return profile

    def list_students(self) -> list[StudentAllergenProfile]:
        return list(self.students.values())

    def get_student(self, student_id: str) -> StudentAllergenProfile | None:
        return self.students.get(student_id)


@dataclass
class InMemoryChoiceRepository(ChoiceRepository):
    """In-memory choices keyed like the unique storage constraint."""

    choices: dict[tuple[str, datetime, SchoolDay], StudentMenuChoice] = field(
        default_factory=dict
    )
    ids: count = field(default_factory=lambda: count(1))

    def exists(self, student_id: str, week_start: datetime, day: SchoolDay) -> bool:
        return (student_id, week_start, day) in self.choices

    def create(  # noqa: PLR0913
        self,
        student_id: str,
        week_start: datetime,
        day: SchoolDay,
        choice: MenuChoice,
        is_auto_assigned: bool,
    ) -> CreateOutcome:
        key = (student_id, week_start, day)
        if key in self.choices:
            return CreateOutcome.ALREADY_EXISTS
        self.choices[key] = self._record(key, choice, is_auto_assigned)
        return CreateOutcome.CREATED

    def upsert(  # noqa: PLR0913
        self,
        student_id: str,
        week_start: datetime,
        day: SchoolDay,
        choice: MenuChoice,
        is_auto_assigned: bool,
    ) -> StudentMenuChoice:
        key = (student_id, week_start, day)
        record = self._record(key, choice, is_auto_assigned)
        self.choices[key] = record
        return record

    def list_for_student(
        self, student_id: str, week_start: datetime
    ) -> list[StudentMenuChoice]:
        order = list(SchoolDay)
        return sorted(
            (
                choice
                for (owner, week, _day), choice in self.choices.items()
                if owner == student_id and week == week_start
            ),
            key=lambda item: order.index(item.day),
        )

    def get(
        self, student_id: str, week_start: datetime, day: SchoolDay
    ) -> StudentMenuChoice | None:
        return self.choices.get((student_id, week_start, day))

    def _record(
        self,
        key: tuple[str, datetime, SchoolDay],
        choice: MenuChoice,
        is_auto_assigned: bool,
    ) -> StudentMenuChoice:
        student_id, week_start, day = key
        return StudentMenuChoice(
            id=f"choice-{next(self.ids)}",
            student_id=student_id,
            week_start=week_start,
            day=day,
            choice=choice,
            is_auto_assigned=is_auto_assigned,
        )


@dataclass
class RacingChoiceRepository(InMemoryChoiceRepository):
    """Reports no existing choice, then loses the insert to another writer."""

    def exists(self, student_id: str, week_start: datetime, day: SchoolDay) -> bool:
        return False


@dataclass
class FlakyChoiceRepository(InMemoryChoiceRepository):
    """Fails every write for one student."""

    failing_student: str = "broken"

    def create(  # noqa: PLR0913
        self,
        student_id: str,
        week_start: datetime,
        day: SchoolDay,
        choice: MenuChoice,
        is_auto_assigned: bool,
    ) -> CreateOutcome:
        if student_id == self.failing_student:
            raise StorageError("Failed to create menu choice: connection reset")
        return super().create(student_id, week_start, day, choice, is_auto_assigned)


@dataclass
class InMemoryMenuRepository(MenuRepository):
    """In-memory weekly menus for tests."""

    menus: list[WeeklyMenu] = field(default_factory=list)

    def publish(self, week_start: datetime = NEXT_MONDAY) -> WeeklyMenu:
        menu = WeeklyMenu(
            id=f"menu-{week_start.date().isoformat()}",
            week_start=week_start,
            week_end=week_start + timedelta(days=4),
            is_active=True,
        )
        self.menus.append(menu)
        return menu

    def find_upcoming_active_menu(self, after: datetime) -> WeeklyMenu | None:
        upcoming = [
            menu for menu in self.menus if menu.is_active and menu.week_start > after
        ]
        return min(upcoming, key=lambda menu: menu.week_start, default=None)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test-header.test-payload.test-signature",
        admin_token="admin-token",
        auto_assignment_enabled=False,
    )


@pytest.fixture
def knowledge_repository() -> SeedKnowledgeRepository:
    return SeedKnowledgeRepository.from_seed()


@pytest.fixture
def matcher(knowledge_repository: SeedKnowledgeRepository) -> IngredientMatcher:
    return IngredientMatcher(knowledge_repository)


@pytest.fixture
def ingredient_service(
    knowledge_repository: SeedKnowledgeRepository, matcher: IngredientMatcher
) -> IngredientService:
    return IngredientService(knowledge_repository, matcher)


@pytest.fixture
def student_repository() -> InMemoryStudentRepository:
    return InMemoryStudentRepository()


@pytest.fixture
def allergen_service(
    matcher: IngredientMatcher,
    knowledge_repository: SeedKnowledgeRepository,
    student_repository: InMemoryStudentRepository,
) -> AllergenService:
    return AllergenService(
        matcher=matcher,
        knowledge_repository=knowledge_repository,
        student_repository=student_repository,
    )


@pytest.fixture
def case_service(
    knowledge_repository: SeedKnowledgeRepository, matcher: IngredientMatcher
) -> CaseService:
    return CaseService(knowledge_repository, matcher)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def policy() -> SelectionWindowPolicy:
    return SelectionWindowPolicy()


@pytest.fixture
def choice_repository() -> InMemoryChoiceRepository:
    return InMemoryChoiceRepository()


@pytest.fixture
def menu_repository() -> InMemoryMenuRepository:
    return InMemoryMenuRepository()


@pytest.fixture
def choice_service(
    choice_repository: InMemoryChoiceRepository,
    menu_repository: InMemoryMenuRepository,
    policy: SelectionWindowPolicy,
    clock: FixedClock,
) -> StudentChoiceService:
    return StudentChoiceService(
        repository=choice_repository,
        menu_repository=menu_repository,
        policy=policy,
        clock=clock,
    )


@pytest.fixture
def auto_assignment_service(
    student_repository: InMemoryStudentRepository,
    choice_repository: InMemoryChoiceRepository,
    menu_repository: InMemoryMenuRepository,
    clock: FixedClock,
) -> AutoAssignmentService:
    return AutoAssignmentService(
        student_repository=student_repository,
        choice_repository=choice_repository,
        menu_repository=menu_repository,
        clock=clock,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FixedClock,
    policy: SelectionWindowPolicy,
    ingredient_service: IngredientService,
    allergen_service: AllergenService,
    case_service: CaseService,
    choice_service: StudentChoiceService,
    auto_assignment_service: AutoAssignmentService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        clock=clock,
        policy=policy,
        ingredient_service=ingredient_service,
        allergen_service=allergen_service,
        case_service=case_service,
        choice_service=choice_service,
        auto_assignment_service=auto_assignment_service,
        scheduler=AutoAssignmentScheduler(
            service=auto_assignment_service, policy=policy, clock=clock
        ),
    )
