from __future__ import annotations

from flask import Flask, current_app, g, request, send_file

from ..common.auth import roles_required
from ..common.datetime_utils import parse_request_date
from ..common.responses import fail, ok
from ..common.validators import as_text
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .qr import decode_qr_image, make_qr_png


def _payload() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/record", methods=["POST"], endpoint="record_attendance")
    @roles_required(Role.INSTRUCTOR)
    def record_attendance():
        data = _payload()
        outcome = service.record_attendance(
            recorded_by=g.principal.user_id,
            student_id=as_text(data.get("studentId")),
            section_id=as_text(data.get("sectionId")),
            day=parse_request_date(data.get("date")),
            status=data.get("status") or "present",
            enrollment_id=data.get("enrollmentId") or None,
        )
        return ok("Attendance recorded successfully", 201 if outcome.created else 200, data=outcome.to_dict())

    @app.route("/api/attendance/absent", methods=["POST"], endpoint="mark_absent")
    @roles_required(Role.INSTRUCTOR)
    def mark_absent():
        data = _payload()
        outcome = service.mark_absent(
            recorded_by=g.principal.user_id,
            student_id=as_text(data.get("studentId")),
            section_id=as_text(data.get("sectionId")),
            day=parse_request_date(data.get("date")),
        )
        return ok(
            "Student marked as absent",
            data={
                "attendanceId": outcome.record.attendance_id,
                "date": outcome.record.attendance_date.isoformat(),
                "status": outcome.record.status.value,
                "attendancePercentage": outcome.percentage,
            },
        )

    @app.route("/api/attendance/status", methods=["POST", "PUT"], endpoint="update_attendance_status")
    @roles_required(Role.INSTRUCTOR)
    def update_attendance_status():
        data = _payload()
        outcome = service.update_attendance_status(
            recorded_by=g.principal.user_id,
            student_id=as_text(data.get("studentId")),
            section_id=as_text(data.get("sectionId")),
            day=parse_request_date(data.get("date")),
            status=data.get("status"),
        )
        return ok(
            f"Attendance status updated to {outcome.record.status.value}",
            data={
                "attendanceId": outcome.record.attendance_id,
                "date": outcome.record.attendance_date.isoformat(),
                "status": outcome.record.status.value,
                "attendancePercentage": outcome.percentage,
            },
        )

    @app.route("/api/attendance/section/<section_id>", methods=["GET"], endpoint="attendance_by_section")
    @roles_required(Role.INSTRUCTOR, Role.ADMIN)
    def attendance_by_section(section_id: str):
        rows = service.get_attendance_by_section(section_id=section_id, day=parse_request_date(request.args.get("date")))
        return ok("Attendance retrieved", count=len(rows), data=[r.to_dict() for r in rows])

    @app.route("/api/attendance/my-attendance", methods=["GET"], endpoint="my_attendance")
    @roles_required(Role.STUDENT)
    def my_attendance():
        entries = service.get_student_attendance(
            student_id=g.principal.user_id,
            section_id=request.args.get("section_id") or None,
        )
        return ok("Attendance retrieved", count=len(entries), data=[e.to_dict() for e in entries])

    @app.route("/api/attendance/student/<student_id>", methods=["GET"], endpoint="student_attendance")
    @roles_required(Role.INSTRUCTOR, Role.ADMIN)
    def student_attendance(student_id: str):
        entries = service.get_student_attendance(
            student_id=student_id,
            section_id=request.args.get("section_id") or None,
        )
        return ok("Attendance retrieved", count=len(entries), data=[e.to_dict() for e in entries])

    @app.route("/api/attendance/qr", methods=["POST"], endpoint="record_attendance_qr")
    @roles_required(Role.INSTRUCTOR)
    def record_attendance_qr():
        data = _payload()
        outcome = service.record_from_qr(
            recorded_by=g.principal.user_id,
            qr_data=data.get("qrData") or "",
            section_id=data.get("sectionId") or None,
            day=parse_request_date(data.get("date")),
        )
        return ok("Attendance recorded successfully", 201 if outcome.created else 200, data=outcome.to_dict())

    @app.route("/api/attendance/qr/image", methods=["POST"], endpoint="record_attendance_qr_image")
    @roles_required(Role.INSTRUCTOR)
    def record_attendance_qr_image():
        if "image" not in request.files:
            raise ValidationError("Image file is required")
        scanned = decode_qr_image(request.files["image"].stream)
        outcome = service.record_from_qr(
            recorded_by=g.principal.user_id,
            qr_data=scanned,
            section_id=request.form.get("sectionId") or None,
            day=parse_request_date(request.form.get("date")),
        )
        return ok("Attendance recorded successfully", 201 if outcome.created else 200, data=outcome.to_dict())

    @app.route("/api/students/<student_id>/qr", methods=["GET"], endpoint="student_qr_image")
    @roles_required(Role.STUDENT, Role.ADMIN)
    def student_qr_image(student_id: str):
        if g.principal.role == Role.STUDENT and g.principal.user_id != student_id:
            return fail("You can only view your own QR code", 403)

        section_id = as_text(request.args.get("section_id"))
        if not section_id:
            raise ValidationError("Section ID is required")

        payload = service.student_qr_payload(student_id=student_id, section_id=section_id)
        buf = make_qr_png(payload.to_json(), box_size=current_app.config.get("QR_BOX_SIZE", 10))
        return send_file(buf, mimetype="image/png")
