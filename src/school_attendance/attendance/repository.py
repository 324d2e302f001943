from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert(self, record: AttendanceRecord) -> tuple[AttendanceRecord, bool]:
        """Insert or overwrite the row keyed by (student, section_ref, day).

        On overwrite only status, recorded_by, updated_at (and a missing
        enrollment back-reference) change. Returns the stored row and whether
        it was created.
        """

        raise NotImplementedError

    def list_for_student_section(self, *, student_id: str, section_ref: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_section_on(self, *, section_ref: str, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: str, *, section_ref: Optional[str] = None) -> Sequence[AttendanceRecord]:
        """Newest day first."""

        raise NotImplementedError

    def count_for_student(self, student_id: str) -> int:
        raise NotImplementedError

    def delete_for_student(self, student_id: str) -> int:
        raise NotImplementedError
