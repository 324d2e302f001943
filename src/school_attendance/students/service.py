from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from ..app_logger import get_logger
from ..attendance.repository import AttendanceRepository
from ..common.ids import new_id
from ..common.validators import as_text, require_gmail, require_int_range, require_non_empty, require_school_id
from ..core.exceptions import ConflictError, NotFoundError
from ..enrollments.repository import EnrollmentRepository
from ..sections.repository import SectionRepository
from .model import Student
from .repository import StudentRepository

logger = get_logger("students.service")


@dataclass(frozen=True)
class StudentDeletion:
    """What a cascading delete removed."""

    student_id: str
    attendance_removed: int
    enrollments_removed: int
    section_memberships_removed: int

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "attendanceRemoved": self.attendance_removed,
            "enrollmentsRemoved": self.enrollments_removed,
            "sectionMembershipsRemoved": self.section_memberships_removed,
        }


class StudentService:
    """Use case: manage students (admin)."""

    def __init__(
        self,
        students: StudentRepository,
        enrollments: EnrollmentRepository,
        attendance: AttendanceRepository,
        sections: SectionRepository,
    ):
        self._students = students
        self._enrollments = enrollments
        self._attendance = attendance
        self._sections = sections

    def create_student(
        self,
        *,
        first_name: str,
        last_name: str,
        year_level,
        program: str,
        faculty: str,
        student_number: str,
        gmail: str,
        middle_name: Optional[str] = None,
        suffix: str = "",
        photo_ref: Optional[str] = None,
    ) -> Student:
        student = Student(
            student_id=new_id(),
            first_name=require_non_empty(first_name, "First name"),
            last_name=require_non_empty(last_name, "Last name"),
            middle_name=as_text(middle_name) or None,
            suffix=as_text(suffix),
            year_level=str(require_int_range(year_level, "Year level", 1, 4)),
            program=require_non_empty(program, "Program"),
            faculty=require_non_empty(faculty, "Faculty"),
            student_number=require_school_id(student_number, "Student ID"),
            gmail=require_gmail(gmail),
            photo_ref=photo_ref or None,
        )

        if self._students.get_by_number(student.student_number):
            raise ConflictError("Student ID already exists")
        if self._students.get_by_gmail(student.gmail):
            raise ConflictError("Gmail address already registered")

        self._students.create(student)
        logger.info("Created student %s (%s)", student.student_id, student.student_number)
        return student

    def get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def update_student(self, student_id: str, **changes) -> Student:
        student = self.get_student(student_id)

        fields = {}
        for name in ("first_name", "last_name", "program", "faculty"):
            if changes.get(name) is not None:
                fields[name] = require_non_empty(changes[name], name.replace("_", " ").capitalize())
        if "middle_name" in changes:
            fields["middle_name"] = as_text(changes["middle_name"]) or None
        if "suffix" in changes:
            fields["suffix"] = as_text(changes["suffix"])
        if changes.get("year_level") is not None:
            fields["year_level"] = str(require_int_range(changes["year_level"], "Year level", 1, 4))
        if changes.get("student_number") is not None:
            number = require_school_id(changes["student_number"], "Student ID")
            other = self._students.get_by_number(number)
            if other and other.student_id != student_id:
                raise ConflictError("Student ID already exists")
            fields["student_number"] = number
        if changes.get("gmail") is not None:
            gmail = require_gmail(changes["gmail"])
            other = self._students.get_by_gmail(gmail)
            if other and other.student_id != student_id:
                raise ConflictError("Gmail address already registered")
            fields["gmail"] = gmail
        if "photo_ref" in changes:
            fields["photo_ref"] = changes["photo_ref"] or None

        updated = replace(student, **fields)
        # rowcount is 0 when nothing changed, which is not a failure here
        self._students.update(updated)
        return updated

    def delete_student(self, student_id: str) -> StudentDeletion:
        self.get_student(student_id)

        # Each step commits separately. The student row goes last so a failed
        # delete can be retried; the ON DELETE CASCADE keys cover rows left behind.
        attendance_removed = self._attendance.delete_for_student(student_id)
        enrollments_removed = self._enrollments.delete_for_student(student_id)
        memberships_removed = self._sections.remove_student_everywhere(student_id)
        if not self._students.delete_by_id(student_id):
            raise NotFoundError("Student not found")

        logger.info(
            "Deleted student %s with %s attendance records and %s enrollments",
            student_id,
            attendance_removed,
            enrollments_removed,
        )
        return StudentDeletion(
            student_id=student_id,
            attendance_removed=attendance_removed,
            enrollments_removed=enrollments_removed,
            section_memberships_removed=memberships_removed,
        )
