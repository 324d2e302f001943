from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Principal roles used for authorization."""

    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Per-session attendance status stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class EnrollmentStatus(str, Enum):
    ACTIVE = "active"
    IN_SESSION = "in_session"


class SectionSource(str, Enum):
    """Which table a resolved section identifier came from."""

    SECTION = "section"
    ASSIGNMENT = "assignment"


class CourseType(str, Enum):
    LAB = "Lab"
    LECTURE = "Lec"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
