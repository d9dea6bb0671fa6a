"""Deadline auto-assignment of default menu choices."""

import logging
from dataclasses import dataclass
from datetime import datetime

from nutriplan.domain.allergy import StudentAllergenProfile
from nutriplan.domain.menus import (
    AutoAssignmentReport,
    CreateOutcome,
    MenuChoice,
    SchoolDay,
)
from nutriplan.services.allergens import StudentRepository
from nutriplan.services.choices import ChoiceRepository, MenuRepository
from nutriplan.services.selection import Clock

_logger = logging.getLogger(__name__)


@dataclass
class AutoAssignmentService:
    """Assign a default choice to every student/day still without one.

    Existing choices are never overwritten. A conflict reported by the
    storage uniqueness constraint means another run already wrote the key,
    so re-running the job for the same week changes nothing.
    """

    student_repository: StudentRepository
    choice_repository: ChoiceRepository
    menu_repository: MenuRepository
    clock: Clock

    def run_auto_assignment(self, now: datetime | None = None) -> AutoAssignmentReport:
        """Sweep all students for the next active menu week."""
        current = now or self.clock.now()
        _logger.info("Auto-assignment started: now=%s", current.isoformat())
        menu = self.menu_repository.find_upcoming_active_menu(current)
        if menu is None:
            _logger.warning(
                "Auto-assignment skipped: no active menu published after %s",
                current.isoformat(),
            )
            return AutoAssignmentReport(status="no_menu")

        report = AutoAssignmentReport(status="completed", week_start=menu.week_start)
        students = self.student_repository.list_students()
        report.students = len(students)
        for student in students:
            default = _default_choice(student)
            for day in SchoolDay:
                self._assign(report, student, day, default)

        _logger.info(
            "Auto-assignment finished: week_start=%s students=%s created=%s "
            "skipped=%s conflicts=%s failed=%s",
            menu.week_start.isoformat(),
            report.students,
            report.created,
            report.skipped,
            report.conflicts,
            report.failed,
        )
        return report

    def _assign(
        self,
        report: AutoAssignmentReport,
        student: StudentAllergenProfile,
        day: SchoolDay,
        choice: MenuChoice,
    ) -> None:
        week_start = report.week_start
        try:
            if self.choice_repository.exists(student.student_id, week_start, day):
                report.skipped += 1
                return
            outcome = self.choice_repository.create(
                student_id=student.student_id,
                week_start=week_start,
                day=day,
                choice=choice,
                is_auto_assigned=True,
            )
        except Exception:
            report.failed += 1
            _logger.exception(
                "Auto-assignment failed: student=%s day=%s",
                student.student_id,
                day.value,
            )
            return

        if outcome is CreateOutcome.ALREADY_EXISTS:
            report.conflicts += 1
            return
        report.created += 1
        report.assignments.append((student.student_id, day, choice))
        _logger.info(
            "Auto-assigned %s menu: student=%s day=%s",
            choice.value,
            student.student_id,
            day.value,
        )


def _default_choice(student: StudentAllergenProfile) -> MenuChoice:
    if student.has_allergies:
        return MenuChoice.SEHAT
    return MenuChoice.HARIAN
