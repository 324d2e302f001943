from __future__ import annotations

from flask import Flask, request

from ..common.auth import roles_required
from ..common.responses import ok
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    service = container.course_service

    @app.route("/api/courses", methods=["POST"], endpoint="create_course")
    @roles_required(Role.ADMIN)
    def create_course():
        data = request.get_json(silent=True) or request.form.to_dict()
        course = service.create_course(
            course_code=data.get("courseId", ""),
            description=data.get("description", ""),
            course_type=data.get("courseType", ""),
            units=data.get("units"),
            term=data.get("term"),
            faculty=data.get("faculty", ""),
            program=data.get("program", ""),
        )
        return ok("Course created successfully", 201, data=course.to_dict())

    @app.route("/api/courses", methods=["GET"], endpoint="list_courses")
    @roles_required(Role.ADMIN)
    def list_courses():
        courses = service.list_courses()
        return ok("Courses retrieved", count=len(courses), data=[c.to_dict() for c in courses])

    @app.route("/api/courses/<course_id>", methods=["GET"], endpoint="get_course")
    @roles_required(Role.ADMIN)
    def get_course(course_id: str):
        return ok("Course retrieved", data=service.get_course(course_id).to_dict())
