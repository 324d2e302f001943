from __future__ import annotations

from typing import Optional

from ..app_logger import get_logger
from ..sections.model import SectionDescriptor
from .model import Enrollment
from .repository import EnrollmentRepository

logger = get_logger("enrollments.locator")


class EnrollmentLocator:
    """Find the enrollment a (student, section) pair most likely refers to.

    Strategies, first match wins:
    1. enrollment.section == descriptor id
    2. enrollment.assignment == descriptor id (or the assignment the
       descriptor was reached through)
    3. enrollment's assignment teaches the descriptor's course
    4. the student's first enrollment of any kind

    Strategy 4 is a best-effort degradation for inconsistent historical data,
    not a correctness guarantee. ``None`` means the student has no
    enrollments at all. Read-only.
    """

    def __init__(self, enrollments: EnrollmentRepository):
        self._enrollments = enrollments

    def locate(self, student_id: str, descriptor: SectionDescriptor) -> Optional[Enrollment]:
        found = self._enrollments.find_by_section(student_id=student_id, section_id=descriptor.section_id)
        if found:
            return found

        for assignment_id in dict.fromkeys(filter(None, (descriptor.section_id, descriptor.assignment_id))):
            found = self._enrollments.find_by_assignment(student_id=student_id, assignment_id=assignment_id)
            if found:
                return found

        if descriptor.course_id:
            found = self._enrollments.find_by_course(student_id=student_id, course_id=descriptor.course_id)
            if found:
                return found

        any_enrollments = self._enrollments.list_for_student(student_id)
        if any_enrollments:
            logger.warning(
                "No matching enrollment for student %s in section %s; falling back to %s",
                student_id,
                descriptor.section_id,
                any_enrollments[0].enrollment_id,
            )
            return any_enrollments[0]

        logger.info("Student %s has no enrollments", student_id)
        return None
