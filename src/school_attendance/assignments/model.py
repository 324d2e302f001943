from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..common.datetime_utils import format_clock_time
from ..core.enums import Weekday


@dataclass(frozen=True)
class Schedule:
    days: tuple[Weekday, ...]
    start_time: time
    end_time: time

    def meets_on(self, day_name: str) -> bool:
        return any(d.value == day_name for d in self.days)

    def has_ended(self, now: datetime) -> bool:
        return self.meets_on(now.strftime("%A")) and now.time().replace(second=0, microsecond=0) > self.end_time

    def to_dict(self) -> dict:
        return {
            "days": [d.value for d in self.days],
            "startTime": format_clock_time(self.start_time),
            "endTime": format_clock_time(self.end_time),
        }


@dataclass(frozen=True)
class CourseAssignment:
    """Binds a course to an instructor for one section label and semester.

    Also acts as the informal "section" most attendance and enrollment rows
    point at.
    """

    assignment_id: str
    course_id: str
    instructor_id: str
    section_label: str
    schedule: Schedule
    academic_year: str
    semester: str

    def to_dict(self) -> dict:
        return {
            "id": self.assignment_id,
            "course": self.course_id,
            "instructor": self.instructor_id,
            "section": self.section_label,
            "schedule": self.schedule.to_dict(),
            "academicYear": self.academic_year,
            "semester": self.semester,
        }
