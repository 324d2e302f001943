from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EnrollmentStatus


@dataclass(frozen=True)
class Enrollment:
    """Links one student to one course assignment.

    ``attendance_percentage`` is derived: only the percentage calculator
    writes it.
    """

    enrollment_id: str
    student_id: str
    assignment_id: str
    academic_year: str
    semester: str
    section_id: Optional[str] = None
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    attendance_percentage: int = 0
    attendance_updated_at: Optional[datetime] = None
    enrolled_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.enrollment_id,
            "student": self.student_id,
            "assignedCourse": self.assignment_id,
            "section": self.section_id,
            "academicYear": self.academic_year,
            "semester": self.semester,
            "status": self.status.value,
            "enrollmentDate": self.enrolled_at.isoformat() if self.enrolled_at else None,
            "attendance": {
                "percentage": self.attendance_percentage,
                "lastUpdated": self.attendance_updated_at.isoformat() if self.attendance_updated_at else None,
            },
        }
