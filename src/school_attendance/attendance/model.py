from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import day_window
from ..core.constants import UNKNOWN_COURSE_CODE, UNKNOWN_COURSE_NAME
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's status for one section on one calendar day.

    ``section_ref`` is the effective section id: a Section id or, for a
    transient section, the course assignment id.
    """

    attendance_id: str
    student_id: str
    section_ref: str
    attendance_date: date
    status: AttendanceStatus
    recorded_by: str
    created_at: datetime
    updated_at: datetime
    enrollment_id: Optional[str] = None

    def to_dict(self) -> dict:
        start, _ = day_window(self.attendance_date)
        return {
            "id": self.attendance_id,
            "student": self.student_id,
            "section": self.section_ref,
            "enrollment": self.enrollment_id,
            "date": start.isoformat(),
            "status": self.status.value,
            "recordedBy": self.recorded_by,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class CourseInfo:
    course_ref: Optional[str]
    course_code: str
    description: str

    @classmethod
    def unknown(cls) -> "CourseInfo":
        return cls(course_ref=None, course_code=UNKNOWN_COURSE_CODE, description=UNKNOWN_COURSE_NAME)

    def to_dict(self) -> dict:
        return {"_id": self.course_ref, "courseId": self.course_code, "description": self.description}


@dataclass(frozen=True)
class RecordOutcome:
    """Result of one attendance write."""

    record: AttendanceRecord
    created: bool
    percentage: Optional[int]
    classes_held: int
    course_info: CourseInfo

    def to_dict(self) -> dict:
        return {
            "attendance": self.record.to_dict(),
            "attendancePercentage": self.percentage,
            "classesHeld": self.classes_held,
            "courseInfo": self.course_info.to_dict(),
        }


@dataclass(frozen=True)
class StudentAttendanceEntry:
    """Read-model: a record plus the course/section it resolved to."""

    record: AttendanceRecord
    course_info: CourseInfo
    section_label: Optional[str] = None

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["course"] = self.course_info.to_dict()
        data["sectionLabel"] = self.section_label
        return data
