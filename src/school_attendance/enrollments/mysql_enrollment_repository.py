from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import EnrollmentStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Enrollment
from .repository import EnrollmentRepository

_COLUMNS = """
    e.enrollment_id, e.student_id, e.assignment_id, e.section_id, e.academic_year,
    e.semester, e.status, e.enrolled_at, e.attendance_percentage, e.attendance_updated_at
"""


def _to_enrollment(r: dict) -> Enrollment:
    return Enrollment(
        enrollment_id=r["enrollment_id"],
        student_id=r["student_id"],
        assignment_id=r["assignment_id"],
        section_id=r.get("section_id"),
        academic_year=r["academic_year"],
        semester=str(r["semester"]),
        status=EnrollmentStatus(r.get("status") or EnrollmentStatus.ACTIVE.value),
        enrolled_at=r.get("enrolled_at"),
        attendance_percentage=int(r.get("attendance_percentage") or 0),
        attendance_updated_at=r.get("attendance_updated_at"),
    )


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _one(self, sql: str, params: tuple) -> Optional[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            r = fetchone(cur)
            return _to_enrollment(r) if r else None

    def _many(self, sql: str, params: tuple = ()) -> list[Enrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_enrollment(r) for r in fetchall(cur)]

    def get_by_id(self, enrollment_id: str) -> Optional[Enrollment]:
        return self._one(f"SELECT {_COLUMNS} FROM enrollments e WHERE e.enrollment_id=%s", (enrollment_id,))

    def find_by_section(self, *, student_id: str, section_id: str) -> Optional[Enrollment]:
        return self._one(
            f"SELECT {_COLUMNS} FROM enrollments e WHERE e.student_id=%s AND e.section_id=%s "
            "ORDER BY e.enrolled_at LIMIT 1",
            (student_id, section_id),
        )

    def find_by_assignment(self, *, student_id: str, assignment_id: str) -> Optional[Enrollment]:
        return self._one(
            f"SELECT {_COLUMNS} FROM enrollments e WHERE e.student_id=%s AND e.assignment_id=%s "
            "ORDER BY e.enrolled_at LIMIT 1",
            (student_id, assignment_id),
        )

    def find_by_course(self, *, student_id: str, course_id: str) -> Optional[Enrollment]:
        return self._one(
            f"""
            SELECT {_COLUMNS}
            FROM enrollments e
            JOIN course_assignments ca ON ca.assignment_id = e.assignment_id
            WHERE e.student_id=%s AND ca.course_id=%s
            ORDER BY e.enrolled_at
            LIMIT 1
            """,
            (student_id, course_id),
        )

    def find_existing(self, *, student_id: str, assignment_id: str, academic_year: str, semester: str) -> Optional[Enrollment]:
        return self._one(
            f"SELECT {_COLUMNS} FROM enrollments e "
            "WHERE e.student_id=%s AND e.assignment_id=%s AND e.academic_year=%s AND e.semester=%s",
            (student_id, assignment_id, academic_year, semester),
        )

    def list_for_student(self, student_id: str) -> Sequence[Enrollment]:
        return self._many(
            f"SELECT {_COLUMNS} FROM enrollments e WHERE e.student_id=%s ORDER BY e.enrolled_at",
            (student_id,),
        )

    def list_for_assignment(self, assignment_id: str) -> Sequence[Enrollment]:
        return self._many(
            f"SELECT {_COLUMNS} FROM enrollments e WHERE e.assignment_id=%s ORDER BY e.enrolled_at",
            (assignment_id,),
        )

    def list_for_instructor(self, instructor_id: str) -> Sequence[Enrollment]:
        return self._many(
            f"""
            SELECT {_COLUMNS}
            FROM enrollments e
            JOIN course_assignments ca ON ca.assignment_id = e.assignment_id
            WHERE ca.instructor_id=%s
            ORDER BY e.enrolled_at
            """,
            (instructor_id,),
        )

    def list_all(self) -> Sequence[Enrollment]:
        return self._many(f"SELECT {_COLUMNS} FROM enrollments e ORDER BY e.enrolled_at")

    def create(self, enrollment: Enrollment) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO enrollments(enrollment_id, student_id, assignment_id, section_id,
                                            academic_year, semester, status)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        enrollment.enrollment_id,
                        enrollment.student_id,
                        enrollment.assignment_id,
                        enrollment.section_id,
                        enrollment.academic_year,
                        enrollment.semester,
                        enrollment.status.value,
                    ),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Already enrolled in this course") from e
            raise

    def delete(self, enrollment_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM enrollments WHERE enrollment_id=%s", (enrollment_id,))
            return cur.rowcount > 0

    def delete_for_student(self, student_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM enrollments WHERE student_id=%s", (student_id,))
            return cur.rowcount

    def update_attendance(self, *, enrollment_id: str, percentage: int, updated_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE enrollments SET attendance_percentage=%s, attendance_updated_at=%s WHERE enrollment_id=%s",
                (int(percentage), updated_at, enrollment_id),
            )
            return cur.rowcount > 0

    def set_status(self, *, enrollment_id: str, status: EnrollmentStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE enrollments SET status=%s WHERE enrollment_id=%s", (status.value, enrollment_id))
            return cur.rowcount > 0

    def reset_status_for_assignment(self, assignment_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE enrollments SET status=%s WHERE assignment_id=%s AND status<>%s",
                (EnrollmentStatus.ACTIVE.value, assignment_id, EnrollmentStatus.ACTIVE.value),
            )
            return cur.rowcount
