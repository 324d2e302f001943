from __future__ import annotations

from ..app_logger import get_logger
from ..assignments.repository import AssignmentRepository
from ..core.enums import SectionSource
from ..core.exceptions import NotFoundError
from .model import SectionDescriptor
from .repository import SectionRepository

logger = get_logger("sections.resolver")


class SectionResolver:
    """Resolve an identifier that may name a Section or a CourseAssignment.

    Lookup order:
    1. Section table. A Section with a course reference is authoritative.
    2. CourseAssignment table. A Section sharing the assignment's course
       takes over (its id and ``classes_held``); otherwise a transient
       descriptor is synthesized with ``classes_held = 0``.
    3. Neither: NotFoundError.
    """

    def __init__(self, sections: SectionRepository, assignments: AssignmentRepository):
        self._sections = sections
        self._assignments = assignments

    def resolve(self, section_id: str) -> SectionDescriptor:
        if not section_id:
            raise NotFoundError("Section not found")

        section = self._sections.get_by_id(section_id)
        if section and section.course_id:
            return SectionDescriptor(
                section_id=section.section_id,
                course_id=section.course_id,
                instructor_id=section.instructor_id,
                classes_held=max(0, section.classes_held),
                source=SectionSource.SECTION,
            )

        assignment = self._assignments.get_by_id(section_id)
        if not assignment:
            raise NotFoundError("Section not found")

        linked = self._sections.find_by_course(assignment.course_id) if assignment.course_id else None
        if linked:
            logger.debug("Assignment %s resolved to linked section %s", assignment.assignment_id, linked.section_id)
            return SectionDescriptor(
                section_id=linked.section_id,
                course_id=linked.course_id,
                instructor_id=linked.instructor_id,
                classes_held=max(0, linked.classes_held),
                source=SectionSource.SECTION,
                assignment_id=assignment.assignment_id,
            )

        logger.info("No section linked to assignment %s; using a transient descriptor", assignment.assignment_id)
        return SectionDescriptor(
            section_id=assignment.assignment_id,
            course_id=assignment.course_id,
            instructor_id=assignment.instructor_id,
            classes_held=0,
            source=SectionSource.ASSIGNMENT,
            persistable=False,
            assignment_id=assignment.assignment_id,
        )
