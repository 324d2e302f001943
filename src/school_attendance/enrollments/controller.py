from __future__ import annotations

from flask import Flask, g, request

from ..common.auth import roles_required
from ..common.responses import ok
from ..common.validators import as_text
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    service = container.enrollment_service

    @app.route("/api/enrollments/enroll", methods=["POST"], endpoint="enroll_student")
    @roles_required(Role.ADMIN)
    def enroll_student():
        data = request.get_json(silent=True) or {}
        enrollment = service.enroll_student(
            student_id=as_text(data.get("studentId")),
            assignment_id=as_text(data.get("assignedCourseId")),
            section_id=data.get("sectionId") or None,
        )
        return ok("Student enrolled successfully", 201, data=enrollment.to_dict())

    @app.route("/api/enrollments/my-enrollments", methods=["GET"], endpoint="my_enrollments")
    @roles_required(Role.STUDENT)
    def my_enrollments():
        rows = service.list_student_enrollments(g.principal.user_id)
        return ok("Enrollments retrieved", count=len(rows), data=[e.to_dict() for e in rows])

    @app.route("/api/enrollments/instructor-enrollments", methods=["GET"], endpoint="instructor_enrollments")
    @roles_required(Role.INSTRUCTOR)
    def instructor_enrollments():
        rows = service.list_instructor_enrollments(g.principal.user_id)
        return ok("Enrollments retrieved", count=len(rows), data=[e.to_dict() for e in rows])

    @app.route("/api/enrollments/all", methods=["GET"], endpoint="all_enrollments")
    @roles_required(Role.ADMIN)
    def all_enrollments():
        rows = service.list_all_enrollments()
        return ok("Enrollments retrieved", count=len(rows), data=[e.to_dict() for e in rows])

    @app.route("/api/enrollments/<enrollment_id>", methods=["DELETE"], endpoint="drop_enrollment")
    @roles_required(Role.ADMIN)
    def drop_enrollment(enrollment_id: str):
        service.drop_enrollment(enrollment_id)
        return ok("Enrollment dropped successfully")
