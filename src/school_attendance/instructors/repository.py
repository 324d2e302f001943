from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Instructor


class InstructorRepository(Protocol):
    def get_by_id(self, instructor_id: str) -> Optional[Instructor]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Instructor]:
        raise NotImplementedError

    def create(self, instructor: Instructor) -> None:
        raise NotImplementedError

    def delete_by_id(self, instructor_id: str) -> bool:
        raise NotImplementedError
