from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Course


class CourseRepository(Protocol):
    def get_by_id(self, course_id: str) -> Optional[Course]:
        raise NotImplementedError

    def count_by_code(self, course_code: str) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[Course]:
        raise NotImplementedError

    def create(self, course: Course) -> None:
        raise NotImplementedError
