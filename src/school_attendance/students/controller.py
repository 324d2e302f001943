from __future__ import annotations

from flask import Flask, request

from ..common.auth import roles_required
from ..common.responses import ok
from ..container import Container
from ..core.enums import Role

# JSON keys accepted by create/update, mapped to service arguments
_FIELDS = {
    "firstName": "first_name",
    "middleName": "middle_name",
    "lastName": "last_name",
    "suffix": "suffix",
    "yearLevel": "year_level",
    "program": "program",
    "faculty": "faculty",
    "studentId": "student_number",
    "gmail": "gmail",
    "photoRef": "photo_ref",
}


def _student_fields() -> dict:
    data = request.get_json(silent=True) or request.form.to_dict()
    return {arg: data[key] for key, arg in _FIELDS.items() if key in data}


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @roles_required(Role.ADMIN)
    def create_student():
        student = service.create_student(**_student_fields())
        return ok("Student registered successfully", 201, data=student.to_dict())

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @roles_required(Role.ADMIN)
    def list_students():
        students = service.list_students()
        return ok("Students retrieved", count=len(students), data=[s.to_dict() for s in students])

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="get_student")
    @roles_required(Role.ADMIN)
    def get_student(student_id: str):
        return ok("Student retrieved", data=service.get_student(student_id).to_dict())

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="update_student")
    @roles_required(Role.ADMIN)
    def update_student(student_id: str):
        student = service.update_student(student_id, **_student_fields())
        return ok("Student updated successfully", data=student.to_dict())

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @roles_required(Role.ADMIN)
    def delete_student(student_id: str):
        summary = service.delete_student(student_id)
        return ok("Student and related records deleted successfully", data=summary.to_dict())
