from __future__ import annotations

from typing import Optional, Sequence

from ...sessions.model import Session
from .base import OverrideTargetStrategy


class LatestSessionStrategy(OverrideTargetStrategy):
    """Amend the most recently created session of the day."""

    def choose(self, day_sessions: Sequence[Session]) -> Optional[Session]:
        return day_sessions[-1] if day_sessions else None
