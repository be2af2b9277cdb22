from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Person:
    """Domain entity: a roster member.

    Note: Plain data object (no storage access). Deleting a person never
    touches the observations recorded for them.
    """

    person_id: str
    name: str
    created_at: datetime
    photo_ref: Optional[str] = None
