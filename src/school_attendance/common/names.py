from __future__ import annotations

from typing import Optional


def full_name(first_name: str, last_name: str, middle_name: Optional[str] = None, suffix: Optional[str] = None) -> str:
    """'Juan D. Dela Cruz Jr.' style display name."""
    middle_initial = f"{middle_name[0]}. " if middle_name else ""
    suffix_str = f" {suffix}" if suffix else ""
    return f"{first_name} {middle_initial}{last_name}{suffix_str}".strip()
