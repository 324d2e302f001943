"""QR payloads for student check-in.

A student's code carries JSON ``{"studentId", "sectionId", "enrollmentId"?}``.
Older printed codes carry only the raw student id.
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import Optional

import qrcode
from PIL import Image
from pyzbar.pyzbar import decode as pyzbar_decode

from ..common.validators import as_text
from ..core.constants import DEFAULT_QR_BOX_SIZE
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class QrPayload:
    student_id: str
    section_id: str
    enrollment_id: Optional[str] = None

    def to_json(self) -> str:
        data = {"studentId": self.student_id, "sectionId": self.section_id}
        if self.enrollment_id:
            data["enrollmentId"] = self.enrollment_id
        return json.dumps(data)


def parse_payload(text: str, *, section_id: Optional[str] = None) -> QrPayload:
    text = as_text(text)
    if not text:
        raise ValidationError("QR data is required")

    try:
        data = json.loads(text)
    except ValueError:
        data = None

    if isinstance(data, dict):
        student_id = as_text(data.get("studentId"))
        target = str(data.get("sectionId") or section_id or "").strip()
        enrollment_id = data.get("enrollmentId") or None
    else:
        student_id, target, enrollment_id = text, as_text(section_id), None

    if not student_id:
        raise ValidationError("QR code does not contain a student id")
    if not target:
        raise ValidationError("Section ID is required")
    return QrPayload(student_id=student_id, section_id=target, enrollment_id=enrollment_id)


def make_qr_png(data: str, *, box_size: int = DEFAULT_QR_BOX_SIZE) -> io.BytesIO:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=int(box_size),
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf


def decode_qr_image(stream) -> str:
    try:
        img = Image.open(stream).convert("RGB")
    except (OSError, ValueError) as e:
        raise ValidationError("Uploaded file is not a readable image") from e

    decoded = pyzbar_decode(img)
    if not decoded:
        raise ValidationError("No QR code found in the image")
    return decoded[0].data.decode("utf-8").strip()
