from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import CourseAssignment


class AssignmentRepository(Protocol):
    def get_by_id(self, assignment_id: str) -> Optional[CourseAssignment]:
        raise NotImplementedError

    def list_all(self) -> Sequence[CourseAssignment]:
        raise NotImplementedError

    def list_for_instructor(self, instructor_id: str) -> Sequence[CourseAssignment]:
        raise NotImplementedError

    def list_scheduled_on(self, day: Weekday) -> Sequence[CourseAssignment]:
        """Assignments whose schedule includes the given weekday."""

        raise NotImplementedError

    def create(self, assignment: CourseAssignment) -> None:
        """Raises ConflictError when (course, section, year, semester) exists."""

        raise NotImplementedError

    def update(self, assignment: CourseAssignment) -> bool:
        raise NotImplementedError

    def delete(self, assignment_id: str) -> bool:
        raise NotImplementedError
