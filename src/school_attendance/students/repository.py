from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for Student.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_number(self, student_number: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_gmail(self, gmail: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, student: Student) -> None:
        """Raises ConflictError on a duplicate school ID or gmail."""

        raise NotImplementedError

    def update(self, student: Student) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: str) -> bool:
        raise NotImplementedError
