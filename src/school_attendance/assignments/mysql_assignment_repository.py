from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Weekday
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, normalize_mysql_time, split_csv
from .model import CourseAssignment, Schedule
from .repository import AssignmentRepository

_COLUMNS = """
    assignment_id, course_id, instructor_id, section_label, schedule_days,
    start_time, end_time, academic_year, semester
"""

_DUPLICATE_MESSAGE = "This course section is already assigned for the academic year and semester"


def _to_assignment(r: dict) -> CourseAssignment:
    return CourseAssignment(
        assignment_id=r["assignment_id"],
        course_id=r["course_id"],
        instructor_id=r["instructor_id"],
        section_label=r["section_label"],
        schedule=Schedule(
            days=tuple(Weekday(d) for d in split_csv(r["schedule_days"])),
            start_time=normalize_mysql_time(r["start_time"]),
            end_time=normalize_mysql_time(r["end_time"]),
        ),
        academic_year=r["academic_year"],
        semester=str(r["semester"]),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[CourseAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM course_assignments {where} ORDER BY academic_year DESC, section_label",
                params,
            )
            return [_to_assignment(r) for r in fetchall(cur)]

    def get_by_id(self, assignment_id: str) -> Optional[CourseAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM course_assignments WHERE assignment_id=%s", (assignment_id,))
            r = fetchone(cur)
            return _to_assignment(r) if r else None

    def list_all(self) -> Sequence[CourseAssignment]:
        return self._select()

    def list_for_instructor(self, instructor_id: str) -> Sequence[CourseAssignment]:
        return self._select("WHERE instructor_id=%s", (instructor_id,))

    def list_scheduled_on(self, day: Weekday) -> Sequence[CourseAssignment]:
        return self._select("WHERE FIND_IN_SET(%s, schedule_days) > 0", (day.value,))

    def _params(self, a: CourseAssignment) -> tuple:
        return (
            a.course_id,
            a.instructor_id,
            a.section_label,
            ",".join(d.value for d in a.schedule.days),
            a.schedule.start_time,
            a.schedule.end_time,
            a.academic_year,
            a.semester,
        )

    def create(self, assignment: CourseAssignment) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO course_assignments({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                    (assignment.assignment_id, *self._params(assignment)),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(_DUPLICATE_MESSAGE) from e
            raise

    def update(self, assignment: CourseAssignment) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE course_assignments
                    SET course_id=%s, instructor_id=%s, section_label=%s, schedule_days=%s,
                        start_time=%s, end_time=%s, academic_year=%s, semester=%s
                    WHERE assignment_id=%s
                    """,
                    (*self._params(assignment), assignment.assignment_id),
                )
                return cur.rowcount > 0
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(_DUPLICATE_MESSAGE) from e
            raise

    def delete(self, assignment_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM course_assignments WHERE assignment_id=%s", (assignment_id,))
            return cur.rowcount > 0
