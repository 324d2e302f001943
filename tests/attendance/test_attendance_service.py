from __future__ import annotations

from datetime import date, datetime

import pytest

from conftest import make_assignment
from school_attendance.core.enums import AttendanceStatus
from school_attendance.core.exceptions import NotFoundError, ValidationError
from school_attendance.sections.model import Section

DAY = date(2024, 3, 1)


@pytest.fixture
def linked(world):
    world["sections_repo"].create(
        Section(section_id="sec1", section_code="A", course_id="crs1", instructor_id="ins1", schedule="")
    )
    return world


def test_mark_absent_then_update_same_day(container, linked):
    service = container.attendance_service

    absent = service.mark_absent(recorded_by="ins1", student_id="stu1", section_id="asg1", day=DAY)
    assert absent.record.status == AttendanceStatus.ABSENT
    assert absent.classes_held == 1
    assert absent.percentage == 0

    present = service.update_attendance_status(
        recorded_by="ins1",
        student_id="stu1",
        section_id="asg1",
        day=DAY,
        status="present",
        now=datetime(2024, 3, 1, 12, 0),
    )
    assert present.record.attendance_id == absent.record.attendance_id
    assert present.record.status == AttendanceStatus.PRESENT
    assert present.classes_held == 1
    assert present.percentage == 100
    assert len(linked["attendance_repo"].rows) == 1


def test_update_requires_status(container, linked):
    with pytest.raises(ValidationError):
        container.attendance_service.update_attendance_status(
            recorded_by="ins1", student_id="stu1", section_id="asg1", day=DAY, status=""
        )


def test_record_requires_ids(container, linked):
    with pytest.raises(ValidationError):
        container.attendance_service.record_attendance(recorded_by="ins1", student_id="", section_id="asg1", day=DAY)


def test_attendance_by_section_lists_the_day(container, linked):
    service = container.attendance_service
    service.record_attendance(recorded_by="ins1", student_id="stu1", section_id="asg1", day=DAY)
    service.record_attendance(recorded_by="ins1", student_id="stu1", section_id="asg1", day=date(2024, 3, 4))

    rows = service.get_attendance_by_section(section_id="asg1", day=DAY)

    assert len(rows) == 1
    assert rows[0].student_name == "Ana Cruz"
    assert rows[0].to_dict()["date"] == "2024-03-01T00:00:00"


def test_student_attendance_resolves_course_metadata(container, linked):
    container.attendance_service.record_attendance(recorded_by="ins1", student_id="stu1", section_id="sec1", day=DAY)

    entries = container.attendance_service.get_student_attendance(student_id="stu1")

    assert len(entries) == 1
    assert entries[0].course_info.course_code == "IT101"
    assert entries[0].section_label == "A"


def test_student_attendance_uses_unknown_course_placeholder(container, world):
    world["assignments_repo"].create(make_assignment("asg2", course_id="gone"))
    world["enrollments_repo"].delete("enr1")
    container.attendance_service.record_attendance(recorded_by="ins1", student_id="stu1", section_id="asg2", day=DAY)

    entries = container.attendance_service.get_student_attendance(student_id="stu1", section_id="asg2")

    assert entries[0].course_info.description == "Unknown Course"


def test_student_attendance_for_unknown_student(container, world):
    with pytest.raises(NotFoundError):
        container.attendance_service.get_student_attendance(student_id="ghost")


def test_record_from_raw_qr_needs_section(container, world):
    with pytest.raises(ValidationError):
        container.attendance_service.record_from_qr(recorded_by="ins1", qr_data="stu1", day=DAY)


def test_record_from_json_qr(container, world):
    outcome = container.attendance_service.record_from_qr(
        recorded_by="ins1",
        qr_data='{"studentId": "stu1", "sectionId": "asg1", "enrollmentId": "enr1"}',
        day=DAY,
    )

    assert outcome.record.enrollment_id == "enr1"
    assert outcome.record.status == AttendanceStatus.PRESENT


def test_student_qr_payload_includes_enrollment(container, world):
    payload = container.attendance_service.student_qr_payload(student_id="stu1", section_id="asg1")

    assert payload.to_json() == '{"studentId": "stu1", "sectionId": "asg1", "enrollmentId": "enr1"}'
