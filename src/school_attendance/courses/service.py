from __future__ import annotations

from typing import Sequence

from ..common.ids import new_id
from ..common.validators import require_choice, require_int_range, require_non_empty
from ..core.enums import CourseType
from ..core.exceptions import ConflictError, NotFoundError
from .model import Course
from .repository import CourseRepository

# One Lab and one Lecture instance may share a course code.
MAX_COURSES_PER_CODE = 2


class CourseService:
    def __init__(self, courses: CourseRepository):
        self._courses = courses

    def create_course(
        self,
        *,
        course_code: str,
        description: str,
        course_type: str,
        units,
        term,
        faculty: str,
        program: str,
    ) -> Course:
        code = require_non_empty(course_code, "Course ID").upper()
        if self._courses.count_by_code(code) >= MAX_COURSES_PER_CODE:
            raise ConflictError("Course ID already has both Lab and Lec instances")

        course = Course(
            course_id=new_id(),
            course_code=code,
            description=require_non_empty(description, "Description"),
            course_type=CourseType(require_choice(course_type, "Course type", [t.value for t in CourseType])),
            units=require_int_range(units, "Units", 1, 6),
            term=require_choice(str(term or ""), "Term", ["1", "2"]),
            faculty=require_non_empty(faculty, "Faculty"),
            program=require_non_empty(program, "Program"),
        )
        self._courses.create(course)
        return course

    def get_course(self, course_id: str) -> Course:
        course = self._courses.get_by_id(course_id)
        if not course:
            raise NotFoundError("Course not found")
        return course

    def list_courses(self) -> Sequence[Course]:
        return self._courses.list_all()
