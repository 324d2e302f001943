from __future__ import annotations

import pytest

from school_attendance.attendance.qr import QrPayload, make_qr_png, parse_payload
from school_attendance.core.exceptions import ValidationError


def test_parses_json_payload():
    payload = parse_payload('{"studentId": "s1", "sectionId": "x1", "enrollmentId": "e1"}')
    assert payload == QrPayload(student_id="s1", section_id="x1", enrollment_id="e1")


def test_json_payload_without_section_uses_given_one():
    assert parse_payload('{"studentId": "s1"}', section_id="x2").section_id == "x2"


def test_raw_student_id_with_section():
    assert parse_payload("s1", section_id="x1") == QrPayload(student_id="s1", section_id="x1")


@pytest.mark.parametrize("text,section_id", [("", "x1"), ("s1", None), ('{"sectionId": "x1"}', None)])
def test_rejects_incomplete_payloads(text, section_id):
    with pytest.raises(ValidationError):
        parse_payload(text, section_id=section_id)


def test_renders_png():
    buf = make_qr_png(QrPayload(student_id="s1", section_id="x1").to_json(), box_size=2)
    assert buf.read(8) == b"\x89PNG\r\n\x1a\n"
