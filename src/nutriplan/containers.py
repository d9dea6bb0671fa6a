"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutriplan.adapters.seed_knowledge_repository import SeedKnowledgeRepository
from nutriplan.adapters.supabase_choice_repository import SupabaseChoiceRepository
from nutriplan.adapters.supabase_knowledge_repository import (
    SupabaseKnowledgeRepository,
)
from nutriplan.adapters.supabase_menu_repository import SupabaseMenuRepository
from nutriplan.adapters.supabase_student_repository import SupabaseStudentRepository
from nutriplan.config import Settings
from nutriplan.services.allergens import AllergenService
from nutriplan.services.auto_assignment import AutoAssignmentService
from nutriplan.services.cases import CaseService
from nutriplan.services.choices import StudentChoiceService
from nutriplan.services.ingredients import (
    IngredientMatcher,
    IngredientService,
    KnowledgeRepository,
)
from nutriplan.services.scheduler import AutoAssignmentScheduler
from nutriplan.services.selection import Clock, SelectionWindowPolicy, SystemClock


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    policy: SelectionWindowPolicy
    ingredient_service: IngredientService
    allergen_service: AllergenService
    case_service: CaseService
    choice_service: StudentChoiceService
    auto_assignment_service: AutoAssignmentService
    scheduler: AutoAssignmentScheduler


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    knowledge_repository: KnowledgeRepository
    if resolved_settings.knowledge_source == "supabase":
        knowledge_repository = SupabaseKnowledgeRepository(supabase_client)
    else:
        knowledge_repository = SeedKnowledgeRepository.from_seed()
    student_repository = SupabaseStudentRepository(supabase_client)
    choice_repository = SupabaseChoiceRepository(supabase_client)
    menu_repository = SupabaseMenuRepository(supabase_client)

    clock = SystemClock(resolved_settings.operational_timezone)
    policy = SelectionWindowPolicy(
        timezone_name=resolved_settings.operational_timezone,
        weekday=resolved_settings.selection_weekday,
        cutoff_hour=resolved_settings.selection_cutoff_hour,
    )
    matcher = IngredientMatcher(knowledge_repository)
    auto_assignment_service = AutoAssignmentService(
        student_repository=student_repository,
        choice_repository=choice_repository,
        menu_repository=menu_repository,
        clock=clock,
    )

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        policy=policy,
        ingredient_service=IngredientService(knowledge_repository, matcher),
        allergen_service=AllergenService(
            matcher=matcher,
            knowledge_repository=knowledge_repository,
            student_repository=student_repository,
        ),
        case_service=CaseService(knowledge_repository, matcher),
        choice_service=StudentChoiceService(
            repository=choice_repository,
            menu_repository=menu_repository,
            policy=policy,
            clock=clock,
        ),
        auto_assignment_service=auto_assignment_service,
        scheduler=AutoAssignmentScheduler(
            service=auto_assignment_service,
            policy=policy,
            clock=clock,
        ),
    )
