from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.service import AssignmentService
from .attendance.calculator import PercentageCalculator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.recorder import AttendanceRecorder
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.repository import CourseRepository
from .courses.service import CourseService
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.locator import EnrollmentLocator
from .enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository
from .enrollments.repository import EnrollmentRepository
from .enrollments.service import EnrollmentService
from .instructors.mysql_instructor_repository import MySQLInstructorRepository
from .instructors.repository import InstructorRepository
from .instructors.service import InstructorService
from .scheduling.status_reset import CourseStatusResetJob
from .sections.mysql_section_repository import MySQLSectionRepository
from .sections.repository import SectionRepository
from .sections.resolver import SectionResolver
from .sections.service import SectionService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    instructors_repo: InstructorRepository
    courses_repo: CourseRepository
    assignments_repo: AssignmentRepository
    sections_repo: SectionRepository
    enrollments_repo: EnrollmentRepository
    attendance_repo: AttendanceRepository

    section_resolver: SectionResolver
    enrollment_locator: EnrollmentLocator
    percentage_calculator: PercentageCalculator
    attendance_recorder: AttendanceRecorder

    student_service: StudentService
    instructor_service: InstructorService
    course_service: CourseService
    assignment_service: AssignmentService
    section_service: SectionService
    enrollment_service: EnrollmentService
    attendance_service: AttendanceService
    status_reset_job: CourseStatusResetJob


def wire_container(
    *,
    conn: Optional[DatabaseConnection],
    students_repo: StudentRepository,
    instructors_repo: InstructorRepository,
    courses_repo: CourseRepository,
    assignments_repo: AssignmentRepository,
    sections_repo: SectionRepository,
    enrollments_repo: EnrollmentRepository,
    attendance_repo: AttendanceRepository,
) -> Container:
    """Build every service on top of the given repositories."""

    resolver = SectionResolver(sections_repo, assignments_repo)
    locator = EnrollmentLocator(enrollments_repo)
    calculator = PercentageCalculator(attendance_repo, enrollments_repo, resolver, locator)
    recorder = AttendanceRecorder(
        attendance=attendance_repo,
        students=students_repo,
        enrollments=enrollments_repo,
        sections=sections_repo,
        assignments=assignments_repo,
        courses=courses_repo,
        resolver=resolver,
        locator=locator,
        calculator=calculator,
    )

    return Container(
        conn=conn,
        students_repo=students_repo,
        instructors_repo=instructors_repo,
        courses_repo=courses_repo,
        assignments_repo=assignments_repo,
        sections_repo=sections_repo,
        enrollments_repo=enrollments_repo,
        attendance_repo=attendance_repo,
        section_resolver=resolver,
        enrollment_locator=locator,
        percentage_calculator=calculator,
        attendance_recorder=recorder,
        student_service=StudentService(students_repo, enrollments_repo, attendance_repo, sections_repo),
        instructor_service=InstructorService(instructors_repo),
        course_service=CourseService(courses_repo),
        assignment_service=AssignmentService(assignments_repo, courses_repo, instructors_repo),
        section_service=SectionService(
            sections_repo,
            assignments_repo,
            enrollments_repo,
            students_repo,
            courses_repo,
            instructors_repo,
            resolver=resolver,
            locator=locator,
        ),
        enrollment_service=EnrollmentService(enrollments_repo, assignments_repo, students_repo),
        attendance_service=AttendanceService(
            recorder,
            attendance_repo,
            students_repo,
            enrollments_repo,
            sections_repo,
            assignments_repo,
            courses_repo,
            resolver=resolver,
            locator=locator,
        ),
        status_reset_job=CourseStatusResetJob(assignments_repo, enrollments_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        students_repo=MySQLStudentRepository(conn),
        instructors_repo=MySQLInstructorRepository(conn),
        courses_repo=MySQLCourseRepository(conn),
        assignments_repo=MySQLAssignmentRepository(conn),
        sections_repo=MySQLSectionRepository(conn),
        enrollments_repo=MySQLEnrollmentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
