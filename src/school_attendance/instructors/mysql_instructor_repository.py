from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Instructor
from .repository import InstructorRepository

_COLUMNS = """
    instructor_id, first_name, middle_name, last_name, suffix,
    program, faculty, instructor_number, gmail, photo_ref
"""


def _to_instructor(r: dict) -> Instructor:
    return Instructor(
        instructor_id=r["instructor_id"],
        first_name=r["first_name"],
        middle_name=r.get("middle_name"),
        last_name=r["last_name"],
        suffix=r.get("suffix") or "",
        program=r["program"],
        faculty=r["faculty"],
        instructor_number=r["instructor_number"],
        gmail=r["gmail"],
        photo_ref=r.get("photo_ref"),
    )


class MySQLInstructorRepository(InstructorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, instructor_id: str) -> Optional[Instructor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM instructors WHERE instructor_id=%s", (instructor_id,))
            r = fetchone(cur)
            return _to_instructor(r) if r else None

    def list_all(self) -> Sequence[Instructor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM instructors ORDER BY last_name, first_name")
            return [_to_instructor(r) for r in fetchall(cur)]

    def create(self, instructor: Instructor) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO instructors({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                    (
                        instructor.instructor_id,
                        instructor.first_name,
                        instructor.middle_name,
                        instructor.last_name,
                        instructor.suffix,
                        instructor.program,
                        instructor.faculty,
                        instructor.instructor_number,
                        instructor.gmail,
                        instructor.photo_ref,
                    ),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("An instructor with this ID or gmail already exists") from e
            raise

    def delete_by_id(self, instructor_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM instructors WHERE instructor_id=%s", (instructor_id,))
            return cur.rowcount > 0
