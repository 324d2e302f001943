from __future__ import annotations

from typing import Optional, Sequence

from ..app_logger import get_logger
from ..assignments.repository import AssignmentRepository
from ..common.ids import new_id
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import Enrollment
from .repository import EnrollmentRepository

logger = get_logger("enrollments.service")


class EnrollmentService:
    def __init__(self, enrollments: EnrollmentRepository, assignments: AssignmentRepository, students: StudentRepository):
        self._enrollments = enrollments
        self._assignments = assignments
        self._students = students

    def enroll_student(self, *, student_id: str, assignment_id: str, section_id: Optional[str] = None) -> Enrollment:
        if not student_id or not assignment_id:
            raise ValidationError("Student ID and assigned course ID are required")
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")

        assignment = self._assignments.get_by_id(assignment_id)
        if not assignment:
            raise NotFoundError("Course assignment not found")

        if self._enrollments.find_existing(
            student_id=student_id,
            assignment_id=assignment_id,
            academic_year=assignment.academic_year,
            semester=assignment.semester,
        ):
            raise ConflictError("Already enrolled in this course")

        enrollment = Enrollment(
            enrollment_id=new_id(),
            student_id=student_id,
            assignment_id=assignment_id,
            section_id=section_id or None,
            academic_year=assignment.academic_year,
            semester=assignment.semester,
        )
        self._enrollments.create(enrollment)
        logger.info("Enrolled student %s in assignment %s", student_id, assignment_id)
        return enrollment

    def list_student_enrollments(self, student_id: str) -> Sequence[Enrollment]:
        return self._enrollments.list_for_student(student_id)

    def list_instructor_enrollments(self, instructor_id: str) -> Sequence[Enrollment]:
        return self._enrollments.list_for_instructor(instructor_id)

    def list_all_enrollments(self) -> Sequence[Enrollment]:
        return self._enrollments.list_all()

    def drop_enrollment(self, enrollment_id: str, *, student_id: Optional[str] = None) -> None:
        """Remove an enrollment; when ``student_id`` is given it must own it."""
        enrollment = self._enrollments.get_by_id(enrollment_id)
        if not enrollment:
            raise NotFoundError("Enrollment not found")
        if student_id and enrollment.student_id != student_id:
            raise AuthorizationError("Not authorized to drop this enrollment")
        self._enrollments.delete(enrollment_id)
