from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT attendance_id, student_id, section_ref, enrollment_id, attendance_date,
           status, recorded_by, created_at, updated_at
    FROM attendance_records
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=r["attendance_id"],
        student_id=r["student_id"],
        section_ref=r["section_ref"],
        enrollment_id=r.get("enrollment_id"),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        recorded_by=r["recorded_by"],
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, record: AttendanceRecord) -> tuple[AttendanceRecord, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(attendance_id, student_id, section_ref, enrollment_id,
                                               attendance_date, status, recorded_by, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    recorded_by=VALUES(recorded_by),
                    updated_at=VALUES(updated_at),
                    enrollment_id=COALESCE(enrollment_id, VALUES(enrollment_id))
                """,
                (
                    record.attendance_id,
                    record.student_id,
                    record.section_ref,
                    record.enrollment_id,
                    record.attendance_date,
                    record.status.value,
                    record.recorded_by,
                    record.created_at,
                    record.updated_at,
                ),
            )
            # MySQL reports 1 for an insert, 2 for an update of an existing row.
            created = cur.rowcount == 1

            cur.execute(
                _SELECT + " WHERE student_id=%s AND section_ref=%s AND attendance_date=%s",
                (record.student_id, record.section_ref, record.attendance_date),
            )
            return _to_record(fetchone(cur)), created

    def list_for_student_section(self, *, student_id: str, section_ref: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE student_id=%s AND section_ref=%s ORDER BY attendance_date, updated_at",
                (student_id, section_ref),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_section_on(self, *, section_ref: str, day: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE section_ref=%s AND attendance_date=%s ORDER BY created_at",
                (section_ref, day),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student(self, student_id: str, *, section_ref: Optional[str] = None) -> Sequence[AttendanceRecord]:
        sql = _SELECT + " WHERE student_id=%s"
        params: list = [student_id]
        if section_ref:
            sql += " AND section_ref=%s"
            params.append(section_ref)
        sql += " ORDER BY attendance_date DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def count_for_student(self, student_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance_records WHERE student_id=%s", (student_id,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def delete_for_student(self, student_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE student_id=%s", (student_id,))
            return cur.rowcount
