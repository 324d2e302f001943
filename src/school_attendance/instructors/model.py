from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.names import full_name
from ..core.enums import Role


@dataclass(frozen=True)
class Instructor:
    instructor_id: str
    first_name: str
    last_name: str
    program: str
    faculty: str
    instructor_number: str
    gmail: str
    middle_name: Optional[str] = None
    suffix: str = ""
    photo_ref: Optional[str] = None
    role: Role = Role.INSTRUCTOR

    @property
    def full_name(self) -> str:
        return full_name(self.first_name, self.last_name, self.middle_name, self.suffix)

    def to_dict(self) -> dict:
        return {
            "id": self.instructor_id,
            "firstName": self.first_name,
            "middleName": self.middle_name,
            "lastName": self.last_name,
            "suffix": self.suffix,
            "fullName": self.full_name,
            "program": self.program,
            "faculty": self.faculty,
            "instructorId": self.instructor_number,
            "gmail": self.gmail,
            "photoRef": self.photo_ref,
            "role": self.role.value,
        }
