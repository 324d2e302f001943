from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import CourseType


@dataclass(frozen=True)
class Course:
    """Catalog entry. ``course_code`` never changes after creation."""

    course_id: str
    course_code: str
    description: str
    course_type: CourseType
    units: int
    term: str
    faculty: str
    program: str

    @property
    def full_course_name(self) -> str:
        return f"{self.course_code} - {self.description} ({self.course_type.value})"

    def to_dict(self) -> dict:
        return {
            "id": self.course_id,
            "courseId": self.course_code,
            "description": self.description,
            "courseType": self.course_type.value,
            "units": self.units,
            "term": self.term,
            "faculty": self.faculty,
            "program": self.program,
            "fullCourseName": self.full_course_name,
        }
