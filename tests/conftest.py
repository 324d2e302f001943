from __future__ import annotations

from dataclasses import replace
from datetime import time

import pytest

from school_attendance.assignments.model import CourseAssignment, Schedule
from school_attendance.container import wire_container
from school_attendance.core.enums import CourseType, EnrollmentStatus, Weekday
from school_attendance.core.exceptions import ConflictError, NotFoundError
from school_attendance.courses.model import Course
from school_attendance.enrollments.model import Enrollment
from school_attendance.instructors.model import Instructor
from school_attendance.sections.model import Section
from school_attendance.students.model import Student


class FakeStudentsRepo:
    def __init__(self):
        self.rows: dict[str, Student] = {}

    def get_by_id(self, student_id):
        return self.rows.get(student_id)

    def get_by_number(self, student_number):
        return next((s for s in self.rows.values() if s.student_number == student_number), None)

    def get_by_gmail(self, gmail):
        return next((s for s in self.rows.values() if s.gmail == gmail), None)

    def list_all(self):
        return list(self.rows.values())

    def create(self, student):
        if self.get_by_number(student.student_number) or self.get_by_gmail(student.gmail):
            raise ConflictError("A student with this school ID or gmail already exists")
        self.rows[student.student_id] = student

    def update(self, student):
        if student.student_id not in self.rows:
            return False
        self.rows[student.student_id] = student
        return True

    def delete_by_id(self, student_id):
        return self.rows.pop(student_id, None) is not None


class FakeInstructorsRepo:
    def __init__(self):
        self.rows: dict[str, Instructor] = {}

    def get_by_id(self, instructor_id):
        return self.rows.get(instructor_id)

    def list_all(self):
        return list(self.rows.values())

    def create(self, instructor):
        if any(i.instructor_number == instructor.instructor_number for i in self.rows.values()):
            raise ConflictError("An instructor with this ID or gmail already exists")
        self.rows[instructor.instructor_id] = instructor

    def delete_by_id(self, instructor_id):
        return self.rows.pop(instructor_id, None) is not None


class FakeCoursesRepo:
    def __init__(self):
        self.rows: dict[str, Course] = {}

    def get_by_id(self, course_id):
        return self.rows.get(course_id)

    def count_by_code(self, course_code):
        return sum(1 for c in self.rows.values() if c.course_code == course_code)

    def list_all(self):
        return list(self.rows.values())

    def create(self, course):
        self.rows[course.course_id] = course


class FakeAssignmentsRepo:
    def __init__(self):
        self.rows: dict[str, CourseAssignment] = {}
        self.broken: set[str] = set()

    def get_by_id(self, assignment_id):
        return self.rows.get(assignment_id)

    def list_all(self):
        return list(self.rows.values())

    def list_for_instructor(self, instructor_id):
        return [a for a in self.rows.values() if a.instructor_id == instructor_id]

    def list_scheduled_on(self, day):
        return [a for a in self.rows.values() if day in a.schedule.days]

    def _key(self, a):
        return (a.course_id, a.section_label, a.academic_year, a.semester)

    def create(self, assignment):
        if any(self._key(a) == self._key(assignment) for a in self.rows.values()):
            raise ConflictError("This course section is already assigned for the academic year and semester")
        self.rows[assignment.assignment_id] = assignment

    def update(self, assignment):
        self.rows[assignment.assignment_id] = assignment
        return True

    def delete(self, assignment_id):
        return self.rows.pop(assignment_id, None) is not None


class FakeSectionsRepo:
    def __init__(self):
        self.rows: dict[str, Section] = {}
        self.members: dict[str, list[str]] = {}

    def get_by_id(self, section_id):
        return self.rows.get(section_id)

    def find_by_course(self, course_id):
        return next((s for s in self.rows.values() if s.course_id == course_id), None)

    def create(self, section):
        self.rows[section.section_id] = section

    def add_student(self, section_id, student_id):
        ids = self.members.setdefault(section_id, [])
        if student_id in ids:
            return False
        ids.append(student_id)
        return True

    def list_student_ids(self, section_id):
        return list(self.members.get(section_id, []))

    def increment_classes_held(self, section_id):
        section = self.rows.get(section_id)
        if not section:
            raise NotFoundError("Section not found")
        self.rows[section_id] = replace(section, classes_held=section.classes_held + 1)
        return section.classes_held + 1

    def remove_student_everywhere(self, student_id):
        removed = 0
        for ids in self.members.values():
            if student_id in ids:
                ids.remove(student_id)
                removed += 1
        return removed


class FakeEnrollmentsRepo:
    def __init__(self, assignments: FakeAssignmentsRepo):
        self._assignments = assignments
        self.rows: dict[str, Enrollment] = {}

    def _first(self, pred):
        return next((e for e in self.rows.values() if pred(e)), None)

    def get_by_id(self, enrollment_id):
        return self.rows.get(enrollment_id)

    def find_by_section(self, *, student_id, section_id):
        return self._first(lambda e: e.student_id == student_id and e.section_id == section_id)

    def find_by_assignment(self, *, student_id, assignment_id):
        return self._first(lambda e: e.student_id == student_id and e.assignment_id == assignment_id)

    def find_by_course(self, *, student_id, course_id):
        def matches(e):
            a = self._assignments.get_by_id(e.assignment_id)
            return e.student_id == student_id and a is not None and a.course_id == course_id

        return self._first(matches)

    def find_existing(self, *, student_id, assignment_id, academic_year, semester):
        return self._first(
            lambda e: (e.student_id, e.assignment_id, e.academic_year, e.semester)
            == (student_id, assignment_id, academic_year, semester)
        )

    def list_for_student(self, student_id):
        return [e for e in self.rows.values() if e.student_id == student_id]

    def list_for_assignment(self, assignment_id):
        return [e for e in self.rows.values() if e.assignment_id == assignment_id]

    def list_for_instructor(self, instructor_id):
        return [
            e
            for e in self.rows.values()
            if (a := self._assignments.get_by_id(e.assignment_id)) and a.instructor_id == instructor_id
        ]

    def list_all(self):
        return list(self.rows.values())

    def create(self, enrollment):
        if self.find_existing(
            student_id=enrollment.student_id,
            assignment_id=enrollment.assignment_id,
            academic_year=enrollment.academic_year,
            semester=enrollment.semester,
        ):
            raise ConflictError("Already enrolled in this course")
        self.rows[enrollment.enrollment_id] = enrollment

    def delete(self, enrollment_id):
        return self.rows.pop(enrollment_id, None) is not None

    def delete_for_student(self, student_id):
        ids = [e.enrollment_id for e in self.list_for_student(student_id)]
        for i in ids:
            del self.rows[i]
        return len(ids)

    def update_attendance(self, *, enrollment_id, percentage, updated_at):
        e = self.rows.get(enrollment_id)
        if not e:
            return False
        self.rows[enrollment_id] = replace(e, attendance_percentage=percentage, attendance_updated_at=updated_at)
        return True

    def set_status(self, *, enrollment_id, status):
        e = self.rows.get(enrollment_id)
        if not e:
            return False
        self.rows[enrollment_id] = replace(e, status=status)
        return True

    def reset_status_for_assignment(self, assignment_id):
        if assignment_id in self._assignments.broken:
            raise RuntimeError("database unavailable")
        count = 0
        for e in self.list_for_assignment(assignment_id):
            if e.status != EnrollmentStatus.ACTIVE:
                self.rows[e.enrollment_id] = replace(e, status=EnrollmentStatus.ACTIVE)
                count += 1
        return count


class FakeAttendanceRepo:
    def __init__(self):
        self.rows: list = []

    def upsert(self, record):
        for i, r in enumerate(self.rows):
            if (r.student_id, r.section_ref, r.attendance_date) == (
                record.student_id,
                record.section_ref,
                record.attendance_date,
            ):
                updated = replace(
                    r,
                    status=record.status,
                    recorded_by=record.recorded_by,
                    updated_at=record.updated_at,
                    enrollment_id=r.enrollment_id or record.enrollment_id,
                )
                self.rows[i] = updated
                return updated, False
        self.rows.append(record)
        return record, True

    def list_for_student_section(self, *, student_id, section_ref):
        return [r for r in self.rows if r.student_id == student_id and r.section_ref == section_ref]

    def list_for_section_on(self, *, section_ref, day):
        return [r for r in self.rows if r.section_ref == section_ref and r.attendance_date == day]

    def list_for_student(self, student_id, *, section_ref=None):
        rows = [r for r in self.rows if r.student_id == student_id and (not section_ref or r.section_ref == section_ref)]
        return sorted(rows, key=lambda r: r.attendance_date, reverse=True)

    def count_for_student(self, student_id):
        return sum(1 for r in self.rows if r.student_id == student_id)

    def delete_for_student(self, student_id):
        before = len(self.rows)
        self.rows = [r for r in self.rows if r.student_id != student_id]
        return before - len(self.rows)


@pytest.fixture
def repos():
    assignments = FakeAssignmentsRepo()
    return {
        "students_repo": FakeStudentsRepo(),
        "instructors_repo": FakeInstructorsRepo(),
        "courses_repo": FakeCoursesRepo(),
        "assignments_repo": assignments,
        "sections_repo": FakeSectionsRepo(),
        "enrollments_repo": FakeEnrollmentsRepo(assignments),
        "attendance_repo": FakeAttendanceRepo(),
    }


@pytest.fixture
def container(repos):
    return wire_container(conn=None, **repos)


def make_student(student_id="stu1", number="2024-0001"):
    return Student(
        student_id=student_id,
        first_name="Ana",
        last_name="Cruz",
        year_level="2",
        program="BSIT",
        faculty="Computing",
        student_number=number,
        gmail=f"{student_id}@gmail.com",
    )


def make_assignment(assignment_id="asg1", course_id="crs1", *, days=(Weekday.MONDAY,), end=time(11, 0)):
    return CourseAssignment(
        assignment_id=assignment_id,
        course_id=course_id,
        instructor_id="ins1",
        section_label="A",
        schedule=Schedule(days=tuple(days), start_time=time(9, 30), end_time=end),
        academic_year="2024-2025",
        semester="1",
    )


def make_enrollment(enrollment_id="enr1", student_id="stu1", assignment_id="asg1", section_id=None):
    return Enrollment(
        enrollment_id=enrollment_id,
        student_id=student_id,
        assignment_id=assignment_id,
        section_id=section_id,
        academic_year="2024-2025",
        semester="1",
    )


@pytest.fixture
def world(repos):
    """One course taught by one instructor, one student enrolled in its assignment."""
    repos["courses_repo"].create(
        Course(
            course_id="crs1",
            course_code="IT101",
            description="Intro to Computing",
            course_type=CourseType.LECTURE,
            units=3,
            term="1",
            faculty="Computing",
            program="BSIT",
        )
    )
    repos["instructors_repo"].create(
        Instructor(
            instructor_id="ins1",
            first_name="Ben",
            last_name="Reyes",
            program="BSIT",
            faculty="Computing",
            instructor_number="1999-0001",
            gmail="ben@gmail.com",
        )
    )
    repos["students_repo"].create(make_student())
    repos["assignments_repo"].create(make_assignment())
    repos["enrollments_repo"].create(make_enrollment())
    return repos
