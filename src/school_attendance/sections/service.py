from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..assignments.repository import AssignmentRepository
from ..common.ids import new_id
from ..common.validators import as_text, require_non_empty
from ..core.exceptions import NotFoundError
from ..courses.repository import CourseRepository
from ..enrollments.locator import EnrollmentLocator
from ..enrollments.model import Enrollment
from ..enrollments.repository import EnrollmentRepository
from ..instructors.repository import InstructorRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import Section
from .repository import SectionRepository
from .resolver import SectionResolver


@dataclass(frozen=True)
class SectionStudent:
    student: Student
    enrollment_id: Optional[str]
    attendance_percentage: int

    def to_dict(self) -> dict:
        data = self.student.to_dict()
        data["enrollmentId"] = self.enrollment_id
        data["attendancePercentage"] = self.attendance_percentage
        return data


class SectionService:
    """Legacy sections and section rosters."""

    def __init__(
        self,
        sections: SectionRepository,
        assignments: AssignmentRepository,
        enrollments: EnrollmentRepository,
        students: StudentRepository,
        courses: CourseRepository,
        instructors: InstructorRepository,
        *,
        resolver: SectionResolver,
        locator: EnrollmentLocator,
    ):
        self._sections = sections
        self._assignments = assignments
        self._enrollments = enrollments
        self._students = students
        self._courses = courses
        self._instructors = instructors
        self._resolver = resolver
        self._locator = locator

    def create_section(self, *, section_code: str, course_id: str, instructor_id: str, schedule: str = "") -> Section:
        if not course_id or not self._courses.get_by_id(course_id):
            raise NotFoundError("Course not found")
        if not instructor_id or not self._instructors.get_by_id(instructor_id):
            raise NotFoundError("Instructor not found")

        section = Section(
            section_id=new_id(),
            section_code=require_non_empty(section_code, "Section code").upper(),
            course_id=course_id,
            instructor_id=instructor_id,
            schedule=as_text(schedule),
        )
        self._sections.create(section)
        return section

    def add_student_to_section(self, *, section_id: str, student_id: str) -> None:
        if not self._sections.get_by_id(section_id):
            raise NotFoundError("Section not found")
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")
        self._sections.add_student(section_id, student_id)

    def get_students_in_section(self, section_id: str) -> Sequence[SectionStudent]:
        """Roster for an assignment id (its enrollments) or a Section id (its student list)."""
        assignment = self._assignments.get_by_id(section_id)
        if assignment:
            return [
                row
                for row in (self._annotate(e.student_id, e) for e in self._enrollments.list_for_assignment(section_id))
                if row is not None
            ]

        section = self._sections.get_by_id(section_id)
        if not section:
            raise NotFoundError("Section not found")

        descriptor = self._resolver.resolve(section_id)
        rows = []
        for student_id in self._sections.list_student_ids(section_id):
            row = self._annotate(student_id, self._locator.locate(student_id, descriptor))
            if row is not None:
                rows.append(row)
        return rows

    def _annotate(self, student_id: str, enrollment: Optional[Enrollment]) -> Optional[SectionStudent]:
        student = self._students.get_by_id(student_id)
        if not student:
            return None
        return SectionStudent(
            student=student,
            enrollment_id=enrollment.enrollment_id if enrollment else None,
            attendance_percentage=enrollment.attendance_percentage if enrollment else 0,
        )
