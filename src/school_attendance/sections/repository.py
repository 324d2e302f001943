from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Section


class SectionRepository(Protocol):
    def get_by_id(self, section_id: str) -> Optional[Section]:
        raise NotImplementedError

    def find_by_course(self, course_id: str) -> Optional[Section]:
        """First Section sharing the course reference, if any."""

        raise NotImplementedError

    def create(self, section: Section) -> None:
        raise NotImplementedError

    def add_student(self, section_id: str, student_id: str) -> bool:
        raise NotImplementedError

    def list_student_ids(self, section_id: str) -> Sequence[str]:
        raise NotImplementedError

    def increment_classes_held(self, section_id: str) -> int:
        """Atomically add one session and return the new counter value."""

        raise NotImplementedError

    def remove_student_everywhere(self, student_id: str) -> int:
        raise NotImplementedError
