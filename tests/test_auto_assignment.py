"""Tests for deadline auto-assignment."""

from datetime import datetime

from nutriplan.domain.menus import MenuChoice, SchoolDay
from nutriplan.services.auto_assignment import AutoAssignmentService
from tests.conftest import (
    JAKARTA,
    NEXT_MONDAY,
    FlakyChoiceRepository,
    RacingChoiceRepository,
)

DEADLINE = datetime(2024, 6, 7, 17, 0, tzinfo=JAKARTA)


def test_defaults_follow_allergy_profile(
    auto_assignment_service, student_repository, choice_repository, menu_repository
) -> None:
    menu_repository.publish()
    student_repository.add("ani")
    student_repository.add("budi", allergens=("soy",))
    student_repository.add("citra", custom_allergies="udang")

    report = auto_assignment_service.run_auto_assignment(DEADLINE)

    ani = choice_repository.get("ani", NEXT_MONDAY, SchoolDay.SENIN)
    budi = choice_repository.get("budi", NEXT_MONDAY, SchoolDay.SENIN)
    citra = choice_repository.get("citra", NEXT_MONDAY, SchoolDay.JUMAT)
    assert (ani.choice, ani.is_auto_assigned) == (MenuChoice.HARIAN, True)
    assert (budi.choice, budi.is_auto_assigned) == (MenuChoice.SEHAT, True)
    assert citra.choice is MenuChoice.SEHAT
    assert report.status == "completed"
    assert report.week_start == NEXT_MONDAY
    assert report.students == 3
    assert report.created == 15


def test_existing_choices_are_kept(
    auto_assignment_service, student_repository, choice_repository, menu_repository
) -> None:
    menu_repository.publish()
    student_repository.add("ani")
    kept = choice_repository.upsert(
        "ani", NEXT_MONDAY, SchoolDay.RABU, MenuChoice.SEHAT, is_auto_assigned=False
    )

    report = auto_assignment_service.run_auto_assignment(DEADLINE)

    assert choice_repository.get("ani", NEXT_MONDAY, SchoolDay.RABU) == kept
    assert report.skipped == 1
    assert report.created == 4


def test_second_run_changes_nothing(
    auto_assignment_service, student_repository, choice_repository, menu_repository
) -> None:
    menu_repository.publish()
    student_repository.add("ani")
    student_repository.add("budi", allergens=("fish",))
    auto_assignment_service.run_auto_assignment(DEADLINE)
    snapshot = dict(choice_repository.choices)

    report = auto_assignment_service.run_auto_assignment(DEADLINE)

    assert choice_repository.choices == snapshot
    assert report.created == 0
    assert report.skipped == 10


def test_no_menu_means_no_writes(
    auto_assignment_service, student_repository, choice_repository
) -> None:
    student_repository.add("ani")

    report = auto_assignment_service.run_auto_assignment(DEADLINE)

    assert report.status == "no_menu"
    assert choice_repository.choices == {}


def test_uses_clock_when_no_time_given(
    auto_assignment_service, student_repository, menu_repository
) -> None:
    menu_repository.publish()
    student_repository.add("ani")

    report = auto_assignment_service.run_auto_assignment()

    assert report.week_start == NEXT_MONDAY


def test_conflicts_are_counted_not_overwritten(
    student_repository, menu_repository, clock
) -> None:
    repository = RacingChoiceRepository()
    menu_repository.publish()
    student_repository.add("ani")
    repository.upsert(
        "ani", NEXT_MONDAY, SchoolDay.SENIN, MenuChoice.SEHAT, is_auto_assigned=False
    )
    service = AutoAssignmentService(
        student_repository=student_repository,
        choice_repository=repository,
        menu_repository=menu_repository,
        clock=clock,
    )

    report = service.run_auto_assignment(DEADLINE)

    assert report.conflicts == 1
    assert report.created == 4
    assert repository.get("ani", NEXT_MONDAY, SchoolDay.SENIN).choice is (
        MenuChoice.SEHAT
    )


def test_one_failing_student_does_not_stop_the_sweep(
    student_repository, menu_repository, clock
) -> None:
    repository = FlakyChoiceRepository(failing_student="broken")
    menu_repository.publish()
    student_repository.add("broken")
    student_repository.add("ani")
    service = AutoAssignmentService(
        student_repository=student_repository,
        choice_repository=repository,
        menu_repository=menu_repository,
        clock=clock,
    )

    report = service.run_auto_assignment(DEADLINE)

    assert report.failed == 5
    assert report.created == 5
    assert repository.get("ani", NEXT_MONDAY, SchoolDay.KAMIS) is not None
