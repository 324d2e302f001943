from __future__ import annotations

from flask import Flask, request

from ..common.auth import roles_required
from ..common.responses import ok
from ..common.validators import as_text
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    service = container.section_service

    @app.route("/api/sections", methods=["POST"], endpoint="create_section")
    @roles_required(Role.ADMIN)
    def create_section():
        data = request.get_json(silent=True) or {}
        section = service.create_section(
            section_code=data.get("sectionCode", ""),
            course_id=as_text(data.get("course")),
            instructor_id=as_text(data.get("instructor")),
            schedule=data.get("schedule", ""),
        )
        return ok(
            "Section created successfully",
            201,
            data={
                "id": section.section_id,
                "sectionCode": section.section_code,
                "course": section.course_id,
                "instructor": section.instructor_id,
                "schedule": section.schedule,
                "classesHeld": section.classes_held,
            },
        )

    @app.route("/api/sections/<section_id>/students", methods=["POST"], endpoint="add_student_to_section")
    @roles_required(Role.ADMIN)
    def add_student_to_section(section_id: str):
        data = request.get_json(silent=True) or {}
        service.add_student_to_section(section_id=section_id, student_id=as_text(data.get("studentId")))
        return ok("Student added to section")

    @app.route("/api/sections/<section_id>/students", methods=["GET"], endpoint="students_in_section")
    @roles_required(Role.ADMIN, Role.INSTRUCTOR)
    def students_in_section(section_id: str):
        rows = service.get_students_in_section(section_id)
        return ok("Students retrieved", count=len(rows), data=[r.to_dict() for r in rows])
