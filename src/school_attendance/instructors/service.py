from __future__ import annotations

from typing import Optional, Sequence

from ..common.ids import new_id
from ..common.validators import as_text, require_gmail, require_non_empty, require_school_id
from ..core.exceptions import NotFoundError
from .model import Instructor
from .repository import InstructorRepository


class InstructorService:
    def __init__(self, instructors: InstructorRepository):
        self._instructors = instructors

    def create_instructor(
        self,
        *,
        first_name: str,
        last_name: str,
        program: str,
        faculty: str,
        instructor_number: str,
        gmail: str,
        middle_name: Optional[str] = None,
        suffix: str = "",
        photo_ref: Optional[str] = None,
    ) -> Instructor:
        instructor = Instructor(
            instructor_id=new_id(),
            first_name=require_non_empty(first_name, "First name"),
            last_name=require_non_empty(last_name, "Last name"),
            middle_name=as_text(middle_name) or None,
            suffix=as_text(suffix),
            program=require_non_empty(program, "Program"),
            faculty=require_non_empty(faculty, "Faculty"),
            instructor_number=require_school_id(instructor_number, "Instructor ID"),
            gmail=require_gmail(gmail),
            photo_ref=photo_ref or None,
        )
        self._instructors.create(instructor)
        return instructor

    def get_instructor(self, instructor_id: str) -> Instructor:
        instructor = self._instructors.get_by_id(instructor_id)
        if not instructor:
            raise NotFoundError("Instructor not found")
        return instructor

    def list_instructors(self) -> Sequence[Instructor]:
        return self._instructors.list_all()

    def delete_instructor(self, instructor_id: str) -> None:
        # Assignments keep pointing at the removed instructor.
        if not self._instructors.delete_by_id(instructor_id):
            raise NotFoundError("Instructor not found")
