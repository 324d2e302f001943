from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Student
from .repository import StudentRepository

_COLUMNS = """
    student_id, first_name, middle_name, last_name, suffix, year_level,
    program, faculty, student_number, gmail, photo_ref
"""


def _to_student(r: dict) -> Student:
    return Student(
        student_id=r["student_id"],
        first_name=r["first_name"],
        middle_name=r.get("middle_name"),
        last_name=r["last_name"],
        suffix=r.get("suffix") or "",
        year_level=str(r["year_level"]),
        program=r["program"],
        faculty=r["faculty"],
        student_number=r["student_number"],
        gmail=r["gmail"],
        photo_ref=r.get("photo_ref"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE {column}=%s", (value,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._get_one("student_id", student_id)

    def get_by_number(self, student_number: str) -> Optional[Student]:
        return self._get_one("student_number", student_number)

    def get_by_gmail(self, gmail: str) -> Optional[Student]:
        return self._get_one("gmail", gmail)

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY last_name, first_name")
            return [_to_student(r) for r in fetchall(cur)]

    def create(self, student: Student) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO students({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                    (
                        student.student_id,
                        student.first_name,
                        student.middle_name,
                        student.last_name,
                        student.suffix,
                        student.year_level,
                        student.program,
                        student.faculty,
                        student.student_number,
                        student.gmail,
                        student.photo_ref,
                    ),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("A student with this school ID or gmail already exists") from e
            raise

    def update(self, student: Student) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE students
                    SET first_name=%s, middle_name=%s, last_name=%s, suffix=%s, year_level=%s,
                        program=%s, faculty=%s, student_number=%s, gmail=%s, photo_ref=%s
                    WHERE student_id=%s
                    """,
                    (
                        student.first_name,
                        student.middle_name,
                        student.last_name,
                        student.suffix,
                        student.year_level,
                        student.program,
                        student.faculty,
                        student.student_number,
                        student.gmail,
                        student.photo_ref,
                        student.student_id,
                    ),
                )
                return cur.rowcount > 0
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("A student with this school ID or gmail already exists") from e
            raise

    def delete_by_id(self, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (student_id,))
            return cur.rowcount > 0
