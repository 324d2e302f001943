from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..core.enums import SectionSource


@dataclass(frozen=True)
class Section:
    """Legacy teaching section with its own roster and session counter."""

    section_id: str
    section_code: str
    course_id: str
    instructor_id: str
    schedule: str
    classes_held: int = 0


@dataclass(frozen=True)
class SectionDescriptor:
    """Normalized view of a section identifier.

    ``source`` tells which table produced it. A descriptor synthesized from a
    course assignment with no matching Section is not persistable: its
    ``classes_held`` only lives for the current request.
    """

    section_id: str
    course_id: Optional[str]
    instructor_id: Optional[str]
    classes_held: int
    source: SectionSource
    persistable: bool = True
    assignment_id: Optional[str] = None

    @property
    def is_transient(self) -> bool:
        return not self.persistable

    def with_classes_held(self, classes_held: int) -> "SectionDescriptor":
        return replace(self, classes_held=max(0, int(classes_held)))
