from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Proposal:
    """One per-member guess returned by the recognition collaborator."""

    person_id: str
    present: bool
    confidence: float = 0

    @classmethod
    def from_dict(cls, raw: dict) -> "Proposal":
        present = raw.get("present", False)
        if not isinstance(present, bool):
            raise ValidationError(f"'present' must be true or false, got {present!r}")
        return cls(
            person_id=str(raw.get("person_id") or raw.get("studentId") or ""),
            present=present,
            confidence=raw.get("confidence") or 0,
        )
