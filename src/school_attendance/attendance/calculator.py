from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from ..app_logger import get_logger
from ..core.constants import MAX_PERCENTAGE
from ..core.enums import AttendanceStatus
from ..enrollments.locator import EnrollmentLocator
from ..enrollments.repository import EnrollmentRepository
from ..sections.model import SectionDescriptor
from ..sections.resolver import SectionResolver
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = get_logger("attendance.calculator")


def attendance_percentage(present: int, total: int) -> int:
    """round_half_up(100 * present / total), clamped to 0..100. total < 1 counts as 1."""
    total = max(int(total), 1)
    present = max(int(present), 0)
    value = (200 * present + total) // (2 * total)
    return min(max(value, 0), MAX_PERCENTAGE)


def merge_same_day(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    """Keep one record per calendar day, the most recently updated one."""
    latest: dict[date, AttendanceRecord] = {}
    for rec in records:
        current = latest.get(rec.attendance_date)
        if current is None or rec.updated_at >= current.updated_at:
            latest[rec.attendance_date] = rec
    return [latest[d] for d in sorted(latest)]


class PercentageCalculator:
    """Recompute a student's attendance percentage for one section and persist it."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        enrollments: EnrollmentRepository,
        resolver: SectionResolver,
        locator: EnrollmentLocator,
    ):
        self._attendance = attendance
        self._enrollments = enrollments
        self._resolver = resolver
        self._locator = locator

    def recompute(
        self,
        student_id: str,
        section_id: str,
        *,
        descriptor: Optional[SectionDescriptor] = None,
        now: datetime | None = None,
    ) -> Optional[int]:
        try:
            descriptor = descriptor or self._resolver.resolve(section_id)

            records = merge_same_day(
                self._attendance.list_for_student_section(student_id=student_id, section_ref=descriptor.section_id)
            )
            present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)

            # A transient section has no durable counter; its records are the total.
            total = max(descriptor.classes_held, 0) if descriptor.persistable else 0
            if total == 0:
                total = len(records)
            percentage = attendance_percentage(present, total)

            enrollment = self._locator.locate(student_id, descriptor)
            if enrollment is None:
                logger.warning(
                    "No enrollment for student %s in section %s; percentage %s not stored",
                    student_id,
                    descriptor.section_id,
                    percentage,
                )
                return percentage

            self._enrollments.update_attendance(
                enrollment_id=enrollment.enrollment_id,
                percentage=percentage,
                updated_at=now or datetime.now(),
            )
            return percentage
        except Exception:
            logger.exception("Failed to recompute attendance for student %s in section %s", student_id, section_id)
            return None
