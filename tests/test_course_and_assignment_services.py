from __future__ import annotations

from datetime import time

import pytest

from school_attendance.core.enums import Weekday
from school_attendance.core.exceptions import ConflictError, NotFoundError, ValidationError

ASSIGN = dict(
    course_id="crs1",
    instructor_id="ins1",
    section="b",
    days=["monday", "Wednesday"],
    start_time="1:00 PM",
    end_time="2:30 PM",
    academic_year="2024-2025",
    semester="1",
)


def test_create_course_allows_lab_and_lecture_per_code(container):
    service = container.course_service
    common = dict(description="Data Structures", units=3, term=1, faculty="Computing", program="BSCS")

    service.create_course(course_code="cs201", course_type="Lec", **common)
    service.create_course(course_code="CS201", course_type="Lab", **common)

    with pytest.raises(ConflictError):
        service.create_course(course_code="CS201", course_type="Lab", **common)


@pytest.mark.parametrize("field,value", [("units", 9), ("term", 3), ("course_type", "Seminar")])
def test_create_course_validates(container, field, value):
    params = dict(
        course_code="CS300",
        description="Compilers",
        course_type="Lec",
        units=3,
        term=2,
        faculty="Computing",
        program="BSCS",
    )
    params[field] = value
    with pytest.raises(ValidationError):
        container.course_service.create_course(**params)


def test_assign_course_normalizes_section_and_schedule(container, world):
    assignment = container.assignment_service.assign_course(**ASSIGN)

    assert assignment.section_label == "B"
    assert assignment.schedule.days == (Weekday.MONDAY, Weekday.WEDNESDAY)
    assert assignment.schedule.start_time == time(13, 0)
    assert assignment.schedule.to_dict()["endTime"] == "2:30 PM"


def test_assign_course_rejects_duplicate_section(container, world):
    container.assignment_service.assign_course(**ASSIGN)
    with pytest.raises(ConflictError):
        container.assignment_service.assign_course(**{**ASSIGN, "section": "B"})


@pytest.mark.parametrize("field", ["course_id", "instructor_id"])
def test_assign_course_requires_existing_references(container, world, field):
    with pytest.raises(NotFoundError):
        container.assignment_service.assign_course(**{**ASSIGN, field: "ghost"})


@pytest.mark.parametrize(
    "field,value",
    [
        ("academic_year", "2024-2026"),
        ("days", ["Sunday"]),
        ("days", []),
        ("start_time", "13:00"),
        ("end_time", "12:00 PM"),
    ],
)
def test_assign_course_validates(container, world, field, value):
    with pytest.raises(ValidationError):
        container.assignment_service.assign_course(**{**ASSIGN, field: value})


def test_update_assignment_keeps_course_and_instructor(container, world):
    updated = container.assignment_service.update_assignment("asg1", section="c", end_time="12:00 PM")

    assert updated.section_label == "C"
    assert updated.course_id == "crs1"
    assert updated.instructor_id == "ins1"
    assert updated.schedule.start_time == time(9, 30)
    assert updated.schedule.end_time == time(12, 0)


def test_instructor_assignments(container, world):
    assert [a.assignment_id for a in container.assignment_service.list_instructor_assignments("ins1")] == ["asg1"]


def test_delete_missing_assignment(container):
    with pytest.raises(NotFoundError):
        container.assignment_service.delete_assignment("ghost")
