from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.names import full_name


@dataclass(frozen=True)
class Student:
    """Domain entity: a registered student.

    Plain data object; no database access here.
    """

    student_id: str
    first_name: str
    last_name: str
    year_level: str
    program: str
    faculty: str
    student_number: str
    gmail: str
    middle_name: Optional[str] = None
    suffix: str = ""
    photo_ref: Optional[str] = None

    @property
    def full_name(self) -> str:
        return full_name(self.first_name, self.last_name, self.middle_name, self.suffix)

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "firstName": self.first_name,
            "middleName": self.middle_name,
            "lastName": self.last_name,
            "suffix": self.suffix,
            "fullName": self.full_name,
            "yearLevel": self.year_level,
            "program": self.program,
            "faculty": self.faculty,
            "studentId": self.student_number,
            "gmail": self.gmail,
            "photoRef": self.photo_ref,
        }
