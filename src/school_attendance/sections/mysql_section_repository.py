from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Section
from .repository import SectionRepository

_COLUMNS = "section_id, section_code, course_id, instructor_id, schedule, classes_held"


def _to_section(r: dict) -> Section:
    return Section(
        section_id=r["section_id"],
        section_code=r["section_code"],
        course_id=r["course_id"],
        instructor_id=r["instructor_id"],
        schedule=r["schedule"],
        classes_held=int(r.get("classes_held") or 0),
    )


class MySQLSectionRepository(SectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, section_id: str) -> Optional[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sections WHERE section_id=%s", (section_id,))
            r = fetchone(cur)
            return _to_section(r) if r else None

    def find_by_course(self, course_id: str) -> Optional[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM sections WHERE course_id=%s ORDER BY created_at LIMIT 1",
                (course_id,),
            )
            r = fetchone(cur)
            return _to_section(r) if r else None

    def create(self, section: Section) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO sections({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s)",
                (
                    section.section_id,
                    section.section_code,
                    section.course_id,
                    section.instructor_id,
                    section.schedule,
                    int(section.classes_held),
                ),
            )

    def add_student(self, section_id: str, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO section_students(section_id, student_id) VALUES(%s,%s)",
                (section_id, student_id),
            )
            return cur.rowcount > 0

    def list_student_ids(self, section_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id FROM section_students WHERE section_id=%s", (section_id,))
            return [r["student_id"] for r in fetchall(cur)]

    def increment_classes_held(self, section_id: str) -> int:
        # Increment in SQL, not read-modify-write.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE sections SET classes_held = classes_held + 1 WHERE section_id=%s", (section_id,))
            if cur.rowcount == 0:
                raise NotFoundError("Section not found")
            cur.execute("SELECT classes_held FROM sections WHERE section_id=%s", (section_id,))
            r = fetchone(cur)
            return int(r["classes_held"]) if r else 0

    def remove_student_everywhere(self, student_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM section_students WHERE student_id=%s", (student_id,))
            return cur.rowcount
