from __future__ import annotations

from datetime import date, datetime

import pytest

from conftest import make_assignment, make_enrollment, make_student
from school_attendance.core.enums import AttendanceStatus, EnrollmentStatus
from school_attendance.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from school_attendance.sections.model import Section

DAY = date(2024, 3, 1)


def _link_section(repos, classes_held=0):
    repos["sections_repo"].create(
        Section(
            section_id="sec1",
            section_code="A",
            course_id="crs1",
            instructor_id="ins1",
            schedule="",
            classes_held=classes_held,
        )
    )


def _record(container, status="present", day=DAY, **kwargs):
    params = dict(student_id="stu1", section_id="asg1", day=day, status=status, recorded_by="ins1")
    params.update(kwargs)
    return container.attendance_recorder.record_status(**params)


def test_same_day_recording_keeps_one_record_and_last_write_wins(container, world):
    _link_section(world)

    first = _record(container, "present", now=datetime(2024, 3, 1, 9, 0))
    second = _record(container, "absent", now=datetime(2024, 3, 1, 9, 30))

    rows = world["attendance_repo"].rows
    assert len(rows) == 1
    assert rows[0].status == AttendanceStatus.ABSENT
    assert second.record.attendance_id == first.record.attendance_id
    assert first.created is True
    assert second.created is False


def test_classes_held_advances_once_per_day(container, world):
    _link_section(world, classes_held=3)

    assert _record(container).classes_held == 4
    assert _record(container, "late").classes_held == 4
    assert _record(container, day=date(2024, 3, 4)).classes_held == 5
    assert world["sections_repo"].get_by_id("sec1").classes_held == 5


def test_transient_section_counter_is_not_durable(container, world):
    outcome = _record(container)

    assert outcome.classes_held == 1
    assert outcome.percentage == 100
    assert outcome.record.section_ref == "asg1"
    assert container.section_resolver.resolve("asg1").classes_held == 0


def test_assignment_only_percentage_counts_records_across_days(container, world):
    _record(container, "present", day=date(2024, 3, 1))
    _record(container, "present", day=date(2024, 3, 4))
    third = _record(container, "absent", day=date(2024, 3, 6))

    assert third.percentage == 67
    assert world["enrollments_repo"].get_by_id("enr1").attendance_percentage == 67


def test_assignment_only_same_day_rerecord_replaces_status(container, world):
    _record(container, "present", now=datetime(2024, 3, 1, 9, 0))
    second = _record(container, "absent", now=datetime(2024, 3, 1, 9, 30))

    assert second.percentage == 0
    assert len(world["attendance_repo"].rows) == 1
    assert world["enrollments_repo"].get_by_id("enr1").attendance_percentage == 0

    third = _record(container, "present", now=datetime(2024, 3, 1, 9, 45))
    assert third.percentage == 100


def test_unknown_student_is_not_found(container, world):
    with pytest.raises(NotFoundError):
        _record(container, student_id="ghost")


def test_unknown_section_is_not_found(container, world):
    with pytest.raises(NotFoundError):
        _record(container, section_id="ghost")


def test_missing_recorder_is_unauthorized(container, world):
    with pytest.raises(AuthenticationError):
        _record(container, recorded_by="")


def test_invalid_status_is_rejected(container, world):
    with pytest.raises(ValidationError):
        _record(container, status="sleeping")


def test_explicit_enrollment_must_exist(container, world):
    with pytest.raises(NotFoundError):
        _record(container, enrollment_id="missing")


def test_explicit_enrollment_must_belong_to_student(container, world):
    world["students_repo"].create(make_student("stu2", "2024-0002"))
    world["enrollments_repo"].create(make_enrollment("enr2", student_id="stu2"))

    with pytest.raises(ValidationError):
        _record(container, enrollment_id="enr2")


def test_record_carries_enrollment_and_course_info(container, world):
    outcome = _record(container)

    assert outcome.record.enrollment_id == "enr1"
    assert outcome.course_info.to_dict() == {
        "_id": "crs1",
        "courseId": "IT101",
        "description": "Intro to Computing",
    }


def test_course_info_falls_back_to_placeholder(container, world):
    world["assignments_repo"].create(make_assignment("asg2", course_id="gone"))
    world["enrollments_repo"].delete("enr1")

    outcome = _record(container, section_id="asg2")

    assert outcome.course_info.description == "Unknown Course"
    assert outcome.course_info.course_ref is None


def test_present_marks_enrollment_in_session(container, world):
    _record(container, "present")
    assert world["enrollments_repo"].get_by_id("enr1").status == EnrollmentStatus.IN_SESSION


def test_absent_leaves_enrollment_active(container, world):
    _record(container, "absent")
    assert world["enrollments_repo"].get_by_id("enr1").status == EnrollmentStatus.ACTIVE


def test_percentage_is_persisted_on_enrollment(container, world):
    _link_section(world)
    _record(container, "present", now=datetime(2024, 3, 1, 10, 0))
    _record(container, "absent", day=date(2024, 3, 4), now=datetime(2024, 3, 4, 10, 0))

    enrollment = world["enrollments_repo"].get_by_id("enr1")
    assert enrollment.attendance_percentage == 50
    assert enrollment.attendance_updated_at == datetime(2024, 3, 4, 10, 0)
