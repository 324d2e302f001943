from __future__ import annotations

from dataclasses import replace

import pytest

from conftest import make_assignment, make_student
from school_attendance.core.exceptions import AuthorizationError, ConflictError, NotFoundError


def test_enroll_copies_term_from_assignment(container, world):
    world["students_repo"].create(make_student("stu2", "2024-0002"))

    enrollment = container.enrollment_service.enroll_student(student_id="stu2", assignment_id="asg1")

    assert enrollment.academic_year == "2024-2025"
    assert enrollment.semester == "1"
    assert enrollment.attendance_percentage == 0


def test_enroll_twice_conflicts(container, world):
    with pytest.raises(ConflictError):
        container.enrollment_service.enroll_student(student_id="stu1", assignment_id="asg1")


def test_enroll_requires_assignment(container, world):
    with pytest.raises(NotFoundError):
        container.enrollment_service.enroll_student(student_id="stu1", assignment_id="ghost")


def test_instructor_enrollments(container, world):
    world["assignments_repo"].create(replace(make_assignment("asg2"), instructor_id="ins2", section_label="Z"))
    container.enrollment_service.enroll_student(student_id="stu1", assignment_id="asg2")

    rows = container.enrollment_service.list_instructor_enrollments("ins1")

    assert [e.assignment_id for e in rows] == ["asg1"]


def test_drop_enrollment_checks_owner(container, world):
    with pytest.raises(AuthorizationError):
        container.enrollment_service.drop_enrollment("enr1", student_id="someone-else")

    container.enrollment_service.drop_enrollment("enr1", student_id="stu1")
    assert world["enrollments_repo"].get_by_id("enr1") is None


def test_students_in_assignment_are_annotated(container, world):
    rows = container.section_service.get_students_in_section("asg1")

    assert len(rows) == 1
    assert rows[0].enrollment_id == "enr1"
    assert rows[0].attendance_percentage == 0


def test_students_in_legacy_section(container, world):
    section = container.section_service.create_section(section_code="a", course_id="crs1", instructor_id="ins1")
    world["students_repo"].create(make_student("stu2", "2024-0002"))
    container.section_service.add_student_to_section(section_id=section.section_id, student_id="stu1")
    container.section_service.add_student_to_section(section_id=section.section_id, student_id="stu2")

    rows = {r.student.student_id: r for r in container.section_service.get_students_in_section(section.section_id)}

    assert rows["stu1"].enrollment_id == "enr1"
    assert rows["stu2"].enrollment_id is None
    assert rows["stu2"].attendance_percentage == 0


def test_students_in_unknown_section(container, world):
    with pytest.raises(NotFoundError):
        container.section_service.get_students_in_section("ghost")
