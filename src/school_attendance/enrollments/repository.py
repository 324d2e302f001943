from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EnrollmentStatus
from .model import Enrollment


class EnrollmentRepository(Protocol):
    def get_by_id(self, enrollment_id: str) -> Optional[Enrollment]:
        raise NotImplementedError

    def find_by_section(self, *, student_id: str, section_id: str) -> Optional[Enrollment]:
        raise NotImplementedError

    def find_by_assignment(self, *, student_id: str, assignment_id: str) -> Optional[Enrollment]:
        raise NotImplementedError

    def find_by_course(self, *, student_id: str, course_id: str) -> Optional[Enrollment]:
        """Match through course_assignments.course_id."""

        raise NotImplementedError

    def find_existing(self, *, student_id: str, assignment_id: str, academic_year: str, semester: str) -> Optional[Enrollment]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[Enrollment]:
        """Oldest first."""

        raise NotImplementedError

    def list_for_assignment(self, assignment_id: str) -> Sequence[Enrollment]:
        raise NotImplementedError

    def list_for_instructor(self, instructor_id: str) -> Sequence[Enrollment]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Enrollment]:
        raise NotImplementedError

    def create(self, enrollment: Enrollment) -> None:
        raise NotImplementedError

    def delete(self, enrollment_id: str) -> bool:
        raise NotImplementedError

    def delete_for_student(self, student_id: str) -> int:
        raise NotImplementedError

    def update_attendance(self, *, enrollment_id: str, percentage: int, updated_at: datetime) -> bool:
        raise NotImplementedError

    def set_status(self, *, enrollment_id: str, status: EnrollmentStatus) -> bool:
        raise NotImplementedError

    def reset_status_for_assignment(self, assignment_id: str) -> int:
        """Set every non-active enrollment of the assignment back to active."""

        raise NotImplementedError
