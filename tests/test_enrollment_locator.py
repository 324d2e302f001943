from __future__ import annotations

from conftest import make_assignment, make_enrollment
from school_attendance.core.enums import SectionSource
from school_attendance.sections.model import SectionDescriptor


def _descriptor(section_id, course_id=None, *, assignment_id=None):
    return SectionDescriptor(
        section_id=section_id,
        course_id=course_id,
        instructor_id="ins1",
        classes_held=0,
        source=SectionSource.SECTION,
        assignment_id=assignment_id,
    )


def test_matches_on_section_first(container, repos):
    enrollments = repos["enrollments_repo"]
    enrollments.create(make_enrollment("e-asg", assignment_id="sec1"))
    enrollments.create(make_enrollment("e-sec", assignment_id="other", section_id="sec1"))

    found = container.enrollment_locator.locate("stu1", _descriptor("sec1"))

    assert found.enrollment_id == "e-sec"


def test_matches_on_assignment_id(container, repos):
    repos["enrollments_repo"].create(make_enrollment("e1", assignment_id="asg1"))

    assert container.enrollment_locator.locate("stu1", _descriptor("asg1")).enrollment_id == "e1"


def test_matches_on_originating_assignment(container, repos):
    repos["enrollments_repo"].create(make_enrollment("e1", assignment_id="asg1"))

    found = container.enrollment_locator.locate("stu1", _descriptor("sec1", assignment_id="asg1"))

    assert found.enrollment_id == "e1"


def test_matches_through_course(container, repos):
    repos["assignments_repo"].create(make_assignment("asg9", course_id="crs9"))
    repos["enrollments_repo"].create(make_enrollment("e9", assignment_id="asg9"))

    found = container.enrollment_locator.locate("stu1", _descriptor("sec1", course_id="crs9"))

    assert found.enrollment_id == "e9"


def test_falls_back_to_any_enrollment_as_best_effort_degradation(container, repos):
    # Unrelated enrollment still comes back; callers accept this for legacy data.
    repos["assignments_repo"].create(make_assignment("asg2", course_id="crs2"))
    repos["enrollments_repo"].create(make_enrollment("e2", assignment_id="asg2"))

    found = container.enrollment_locator.locate("stu1", _descriptor("sec1", course_id="crs1"))

    assert found.enrollment_id == "e2"


def test_returns_none_without_enrollments(container):
    assert container.enrollment_locator.locate("stu1", _descriptor("sec1")) is None


def test_ignores_other_students(container, repos):
    repos["enrollments_repo"].create(make_enrollment("e1", student_id="stu2", assignment_id="sec1"))

    assert container.enrollment_locator.locate("stu1", _descriptor("sec1")) is None
