from __future__ import annotations

from flask import Flask, g, request

from ..common.auth import roles_required
from ..common.responses import ok
from ..common.validators import as_text
from ..container import Container
from ..core.enums import Role


def _schedule(data: dict) -> dict:
    schedule = data.get("schedule") or {}
    return {
        "days": schedule.get("days"),
        "start_time": schedule.get("startTime"),
        "end_time": schedule.get("endTime"),
    }


def register(app: Flask, container: Container) -> None:
    service = container.assignment_service

    @app.route("/api/assigned-courses", methods=["POST"], endpoint="assign_course")
    @roles_required(Role.ADMIN)
    def assign_course():
        data = request.get_json(silent=True) or {}
        assignment = service.assign_course(
            course_id=as_text(data.get("course")),
            instructor_id=as_text(data.get("instructor")),
            section=data.get("section", ""),
            academic_year=data.get("academicYear", ""),
            semester=data.get("semester"),
            **_schedule(data),
        )
        return ok("Course assigned successfully", 201, data=assignment.to_dict())

    @app.route("/api/assigned-courses", methods=["GET"], endpoint="list_assignments")
    @roles_required(Role.ADMIN)
    def list_assignments():
        assignments = service.list_assignments()
        return ok("Assigned courses retrieved", count=len(assignments), data=[a.to_dict() for a in assignments])

    @app.route("/api/assigned-courses/mine", methods=["GET"], endpoint="my_assignments")
    @roles_required(Role.INSTRUCTOR)
    def my_assignments():
        assignments = service.list_instructor_assignments(g.principal.user_id)
        return ok("Assigned courses retrieved", count=len(assignments), data=[a.to_dict() for a in assignments])

    @app.route("/api/assigned-courses/<assignment_id>", methods=["GET"], endpoint="get_assignment")
    @roles_required(Role.ADMIN)
    def get_assignment(assignment_id: str):
        return ok("Assigned course retrieved", data=service.get_assignment(assignment_id).to_dict())

    @app.route("/api/assigned-courses/<assignment_id>", methods=["PUT"], endpoint="update_assignment")
    @roles_required(Role.ADMIN)
    def update_assignment(assignment_id: str):
        data = request.get_json(silent=True) or {}
        schedule = _schedule(data) if "schedule" in data else {}
        assignment = service.update_assignment(
            assignment_id,
            section=data.get("section"),
            academic_year=data.get("academicYear"),
            semester=data.get("semester"),
            **schedule,
        )
        return ok("Assigned course updated successfully", data=assignment.to_dict())

    @app.route("/api/assigned-courses/<assignment_id>", methods=["DELETE"], endpoint="delete_assignment")
    @roles_required(Role.ADMIN)
    def delete_assignment(assignment_id: str):
        service.delete_assignment(assignment_id)
        return ok("Assigned course deleted successfully")
