from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_clock_time, parse_clock_time
from ..common.ids import new_id
from ..common.validators import require_academic_year, require_choice, require_non_empty
from ..core.enums import Weekday
from ..core.exceptions import NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..instructors.repository import InstructorRepository
from .model import CourseAssignment, Schedule
from .repository import AssignmentRepository


def build_schedule(days: Iterable[str] | None, start_time: str, end_time: str) -> Schedule:
    names = [str(d).strip().capitalize() for d in (days or []) if str(d).strip()]
    if not names:
        raise ValidationError("At least one schedule day is required")
    try:
        weekdays = tuple(dict.fromkeys(Weekday(n) for n in names))
    except ValueError:
        raise ValidationError("Schedule days must be between Monday and Saturday")

    start = parse_clock_time(start_time)
    end = parse_clock_time(end_time)
    if end <= start:
        raise ValidationError("End time must be after start time")
    return Schedule(days=weekdays, start_time=start, end_time=end)


class AssignmentService:
    """Use case: assign courses to instructors (admin)."""

    def __init__(self, assignments: AssignmentRepository, courses: CourseRepository, instructors: InstructorRepository):
        self._assignments = assignments
        self._courses = courses
        self._instructors = instructors

    def assign_course(
        self,
        *,
        course_id: str,
        instructor_id: str,
        section: str,
        days: Iterable[str],
        start_time: str,
        end_time: str,
        academic_year: str,
        semester,
    ) -> CourseAssignment:
        if not course_id or not self._courses.get_by_id(course_id):
            raise NotFoundError("Course not found")
        if not instructor_id or not self._instructors.get_by_id(instructor_id):
            raise NotFoundError("Instructor not found")

        assignment = CourseAssignment(
            assignment_id=new_id(),
            course_id=course_id,
            instructor_id=instructor_id,
            section_label=require_non_empty(section, "Section").upper(),
            schedule=build_schedule(days, start_time, end_time),
            academic_year=require_academic_year(academic_year),
            semester=require_choice(str(semester or ""), "Semester", ["1", "2"]),
        )
        self._assignments.create(assignment)
        return assignment

    def get_assignment(self, assignment_id: str) -> CourseAssignment:
        assignment = self._assignments.get_by_id(assignment_id)
        if not assignment:
            raise NotFoundError("Course assignment not found")
        return assignment

    def list_assignments(self) -> Sequence[CourseAssignment]:
        return self._assignments.list_all()

    def list_instructor_assignments(self, instructor_id: str) -> Sequence[CourseAssignment]:
        return self._assignments.list_for_instructor(instructor_id)

    def update_assignment(
        self,
        assignment_id: str,
        *,
        section: Optional[str] = None,
        days: Optional[Iterable[str]] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        academic_year: Optional[str] = None,
        semester=None,
    ) -> CourseAssignment:
        """Course and instructor stay fixed; everything else may change."""
        current = self.get_assignment(assignment_id)
        fields = {}

        if section is not None:
            fields["section_label"] = require_non_empty(section, "Section").upper()
        if days is not None or start_time is not None or end_time is not None:
            schedule = current.schedule
            fields["schedule"] = build_schedule(
                days if days is not None else [d.value for d in schedule.days],
                start_time or format_clock_time(schedule.start_time),
                end_time or format_clock_time(schedule.end_time),
            )
        if academic_year is not None:
            fields["academic_year"] = require_academic_year(academic_year)
        if semester is not None:
            fields["semester"] = require_choice(str(semester), "Semester", ["1", "2"])

        updated = replace(current, **fields)
        self._assignments.update(updated)
        return updated

    def delete_assignment(self, assignment_id: str) -> None:
        if not self._assignments.delete(assignment_id):
            raise NotFoundError("Course assignment not found")
