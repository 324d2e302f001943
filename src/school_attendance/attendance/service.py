from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..app_logger import get_logger
from ..assignments.repository import AssignmentRepository
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..enrollments.locator import EnrollmentLocator
from ..enrollments.repository import EnrollmentRepository
from ..sections.repository import SectionRepository
from ..sections.resolver import SectionResolver
from ..students.repository import StudentRepository
from .model import AttendanceRecord, CourseInfo, RecordOutcome, StudentAttendanceEntry
from .qr import QrPayload, parse_payload
from .recorder import AttendanceRecorder, coerce_status
from .repository import AttendanceRepository

logger = get_logger("attendance.service")


@dataclass(frozen=True)
class SectionAttendanceRow:
    record: AttendanceRecord
    student_name: str
    student_number: Optional[str]

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["studentName"] = self.student_name
        data["studentId"] = self.student_number
        return data


class AttendanceService:
    def __init__(
        self,
        recorder: AttendanceRecorder,
        attendance: AttendanceRepository,
        students: StudentRepository,
        enrollments: EnrollmentRepository,
        sections: SectionRepository,
        assignments: AssignmentRepository,
        courses: CourseRepository,
        *,
        resolver: SectionResolver,
        locator: EnrollmentLocator,
    ):
        self._recorder = recorder
        self._attendance = attendance
        self._students = students
        self._enrollments = enrollments
        self._sections = sections
        self._assignments = assignments
        self._courses = courses
        self._resolver = resolver
        self._locator = locator

    def record_attendance(
        self,
        *,
        recorded_by: str,
        student_id: str,
        section_id: str,
        day: date,
        status=AttendanceStatus.PRESENT,
        enrollment_id: Optional[str] = None,
        now: datetime | None = None,
    ) -> RecordOutcome:
        if not student_id or not section_id:
            raise ValidationError("Student ID and Section ID are required")
        return self._recorder.record_status(
            student_id=student_id,
            section_id=section_id,
            day=day,
            status=status,
            recorded_by=recorded_by,
            enrollment_id=enrollment_id,
            now=now,
        )

    def mark_absent(
        self,
        *,
        recorded_by: str,
        student_id: str,
        section_id: str,
        day: date,
        now: datetime | None = None,
    ) -> RecordOutcome:
        if not student_id or not section_id:
            raise ValidationError("Student ID and Section ID are required")
        return self._recorder.record_status(
            student_id=student_id,
            section_id=section_id,
            day=day,
            status=AttendanceStatus.ABSENT,
            recorded_by=recorded_by,
            now=now,
        )

    def update_attendance_status(
        self,
        *,
        recorded_by: str,
        student_id: str,
        section_id: str,
        day: date,
        status,
        now: datetime | None = None,
    ) -> RecordOutcome:
        if not student_id or not section_id or not status:
            raise ValidationError("Student ID, Section ID and status are required")
        return self._recorder.record_status(
            student_id=student_id,
            section_id=section_id,
            day=day,
            status=coerce_status(status),
            recorded_by=recorded_by,
            now=now,
        )

    def record_from_qr(
        self,
        *,
        recorded_by: str,
        qr_data: str,
        day: date,
        section_id: Optional[str] = None,
        now: datetime | None = None,
    ) -> RecordOutcome:
        payload = parse_payload(qr_data, section_id=section_id)
        return self.record_attendance(
            recorded_by=recorded_by,
            student_id=payload.student_id,
            section_id=payload.section_id,
            day=day,
            enrollment_id=payload.enrollment_id,
            now=now,
        )

    def student_qr_payload(self, *, student_id: str, section_id: str) -> QrPayload:
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")
        descriptor = self._resolver.resolve(section_id)
        enrollment = self._locator.locate(student_id, descriptor)
        return QrPayload(
            student_id=student_id,
            section_id=descriptor.section_id,
            enrollment_id=enrollment.enrollment_id if enrollment else None,
        )

    def get_attendance_by_section(self, *, section_id: str, day: date) -> list[SectionAttendanceRow]:
        descriptor = self._resolver.resolve(section_id)

        rows: list[SectionAttendanceRow] = []
        for ref in dict.fromkeys((descriptor.section_id, section_id)):
            for rec in self._attendance.list_for_section_on(section_ref=ref, day=day):
                student = self._students.get_by_id(rec.student_id)
                rows.append(
                    SectionAttendanceRow(
                        record=rec,
                        student_name=student.full_name if student else "Unknown Student",
                        student_number=student.student_number if student else None,
                    )
                )
        return rows

    def get_student_attendance(self, *, student_id: str, section_id: Optional[str] = None) -> list[StudentAttendanceEntry]:
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")

        section_ref = self._resolver.resolve(section_id).section_id if section_id else None
        records = self._attendance.list_for_student(student_id, section_ref=section_ref)

        cache: dict[tuple[str, Optional[str]], tuple[CourseInfo, Optional[str]]] = {}
        entries = []
        for rec in records:
            key = (rec.section_ref, rec.enrollment_id)
            if key not in cache:
                cache[key] = self._describe_section(rec)
            course_info, label = cache[key]
            entries.append(StudentAttendanceEntry(record=rec, course_info=course_info, section_label=label))
        return entries

    def _describe_section(self, rec: AttendanceRecord) -> tuple[CourseInfo, Optional[str]]:
        """Course and section label for a record: Section, then assignment, then enrollment."""
        try:
            section = self._sections.get_by_id(rec.section_ref)
            if section:
                return self._course_info(section.course_id), section.section_code

            assignment = self._assignments.get_by_id(rec.section_ref)
            if not assignment and rec.enrollment_id:
                enrollment = self._enrollments.get_by_id(rec.enrollment_id)
                assignment = self._assignments.get_by_id(enrollment.assignment_id) if enrollment else None
            if assignment:
                return self._course_info(assignment.course_id), assignment.section_label
        except Exception:
            logger.exception("Could not resolve section metadata for attendance %s", rec.attendance_id)

        return CourseInfo.unknown(), None

    def _course_info(self, course_id: Optional[str]) -> CourseInfo:
        course = self._courses.get_by_id(course_id) if course_id else None
        if not course:
            return CourseInfo.unknown()
        return CourseInfo(course_ref=course.course_id, course_code=course.course_code, description=course.description)
