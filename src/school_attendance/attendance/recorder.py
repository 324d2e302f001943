from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..app_logger import get_logger
from ..assignments.repository import AssignmentRepository
from ..common.ids import new_id
from ..core.constants import UNKNOWN_COURSE_NAME
from ..core.enums import AttendanceStatus, EnrollmentStatus
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..enrollments.locator import EnrollmentLocator
from ..enrollments.model import Enrollment
from ..enrollments.repository import EnrollmentRepository
from ..sections.model import SectionDescriptor
from ..sections.repository import SectionRepository
from ..sections.resolver import SectionResolver
from ..students.repository import StudentRepository
from .calculator import PercentageCalculator
from .model import AttendanceRecord, CourseInfo, RecordOutcome
from .repository import AttendanceRepository

logger = get_logger("attendance.recorder")

_IN_SESSION_STATUSES = {AttendanceStatus.PRESENT, AttendanceStatus.LATE}


def coerce_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid status. Must be one of: {allowed}")


class AttendanceRecorder:
    """Idempotent per-day attendance writes.

    One record exists per (student, effective section id, calendar day).
    Re-recording the same day overwrites the status; only the first write
    of a day advances the section's ``classes_held``.
    """

    def __init__(
        self,
        *,
        attendance: AttendanceRepository,
        students: StudentRepository,
        enrollments: EnrollmentRepository,
        sections: SectionRepository,
        assignments: AssignmentRepository,
        courses: CourseRepository,
        resolver: SectionResolver,
        locator: EnrollmentLocator,
        calculator: PercentageCalculator,
    ):
        self._attendance = attendance
        self._students = students
        self._enrollments = enrollments
        self._sections = sections
        self._assignments = assignments
        self._courses = courses
        self._resolver = resolver
        self._locator = locator
        self._calculator = calculator

    def record_status(
        self,
        *,
        student_id: str,
        section_id: str,
        day: date,
        status,
        recorded_by: str,
        enrollment_id: Optional[str] = None,
        now: datetime | None = None,
    ) -> RecordOutcome:
        status = coerce_status(status)
        if not recorded_by:
            raise AuthenticationError("Unauthorized")
        if not student_id or not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")

        descriptor = self._resolver.resolve(section_id)
        enrollment = self._find_enrollment(student_id, descriptor, enrollment_id)

        now = now or datetime.now()
        record, created = self._attendance.upsert(
            AttendanceRecord(
                attendance_id=new_id(),
                student_id=student_id,
                section_ref=descriptor.section_id,
                attendance_date=day,
                status=status,
                recorded_by=recorded_by,
                created_at=now,
                updated_at=now,
                enrollment_id=enrollment.enrollment_id if enrollment else None,
            )
        )

        if created:
            descriptor = self._advance_classes_held(descriptor)

        percentage = self._calculator.recompute(student_id, descriptor.section_id, descriptor=descriptor, now=now)

        if enrollment and status in _IN_SESSION_STATUSES:
            self._mark_in_session(enrollment)

        return RecordOutcome(
            record=record,
            created=created,
            percentage=percentage,
            classes_held=descriptor.classes_held,
            course_info=self._course_info(descriptor, enrollment),
        )

    def _find_enrollment(
        self, student_id: str, descriptor: SectionDescriptor, enrollment_id: Optional[str]
    ) -> Optional[Enrollment]:
        if enrollment_id:
            enrollment = self._enrollments.get_by_id(enrollment_id)
            if not enrollment:
                raise NotFoundError("Enrollment not found")
            if enrollment.student_id != student_id:
                raise ValidationError("Enrollment does not belong to this student")
            return enrollment

        try:
            return self._locator.locate(student_id, descriptor)
        except Exception:
            logger.exception("Enrollment lookup failed for student %s", student_id)
            return None

    def _advance_classes_held(self, descriptor: SectionDescriptor) -> SectionDescriptor:
        if descriptor.is_transient:
            logger.debug("Section %s is transient; classes held advanced in memory only", descriptor.section_id)
            return descriptor.with_classes_held(descriptor.classes_held + 1)
        classes_held = self._sections.increment_classes_held(descriptor.section_id)
        return descriptor.with_classes_held(classes_held)

    def _mark_in_session(self, enrollment: Enrollment) -> None:
        if enrollment.status == EnrollmentStatus.IN_SESSION:
            return
        try:
            self._enrollments.set_status(enrollment_id=enrollment.enrollment_id, status=EnrollmentStatus.IN_SESSION)
        except Exception:
            logger.exception("Could not mark enrollment %s in session", enrollment.enrollment_id)

    def _course_info(self, descriptor: SectionDescriptor, enrollment: Optional[Enrollment]) -> CourseInfo:
        try:
            course = self._courses.get_by_id(descriptor.course_id) if descriptor.course_id else None
            if not course and enrollment:
                assignment = self._assignments.get_by_id(enrollment.assignment_id)
                course = self._courses.get_by_id(assignment.course_id) if assignment else None
        except Exception:
            logger.exception("Course lookup failed for section %s", descriptor.section_id)
            course = None

        if not course:
            return CourseInfo.unknown()
        return CourseInfo(
            course_ref=course.course_id,
            course_code=course.course_code,
            description=course.description or UNKNOWN_COURSE_NAME,
        )
