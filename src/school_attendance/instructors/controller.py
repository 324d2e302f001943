from __future__ import annotations

from flask import Flask, request

from ..common.auth import roles_required
from ..common.responses import ok
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    service = container.instructor_service

    @app.route("/api/instructors", methods=["POST"], endpoint="create_instructor")
    @roles_required(Role.ADMIN)
    def create_instructor():
        data = request.get_json(silent=True) or request.form.to_dict()
        instructor = service.create_instructor(
            first_name=data.get("firstName", ""),
            middle_name=data.get("middleName"),
            last_name=data.get("lastName", ""),
            suffix=data.get("suffix", ""),
            program=data.get("program", ""),
            faculty=data.get("faculty", ""),
            instructor_number=data.get("instructorId", ""),
            gmail=data.get("gmail", ""),
            photo_ref=data.get("photoRef"),
        )
        return ok("Instructor registered successfully", 201, data=instructor.to_dict())

    @app.route("/api/instructors", methods=["GET"], endpoint="list_instructors")
    @roles_required(Role.ADMIN)
    def list_instructors():
        instructors = service.list_instructors()
        return ok("Instructors retrieved", count=len(instructors), data=[i.to_dict() for i in instructors])

    @app.route("/api/instructors/<instructor_id>", methods=["DELETE"], endpoint="delete_instructor")
    @roles_required(Role.ADMIN)
    def delete_instructor(instructor_id: str):
        service.delete_instructor(instructor_id)
        return ok("Instructor deleted successfully")
