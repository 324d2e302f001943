from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import CourseType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Course
from .repository import CourseRepository

_COLUMNS = "course_id, course_code, description, course_type, units, term, faculty, program"


def _to_course(r: dict) -> Course:
    return Course(
        course_id=r["course_id"],
        course_code=r["course_code"],
        description=r["description"],
        course_type=CourseType(r["course_type"]),
        units=int(r["units"]),
        term=str(r["term"]),
        faculty=r["faculty"],
        program=r["program"],
    )


class MySQLCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, course_id: str) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM courses WHERE course_id=%s", (course_id,))
            r = fetchone(cur)
            return _to_course(r) if r else None

    def count_by_code(self, course_code: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM courses WHERE course_code=%s", (course_code,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def list_all(self) -> Sequence[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM courses ORDER BY course_code")
            return [_to_course(r) for r in fetchall(cur)]

    def create(self, course: Course) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO courses({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s)",
                (
                    course.course_id,
                    course.course_code,
                    course.description,
                    course.course_type.value,
                    course.units,
                    course.term,
                    course.faculty,
                    course.program,
                ),
            )
