from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...sessions.model import Session


class OverrideTargetStrategy(ABC):
    """Strategy Pattern: decide which of a day's sessions a manual override amends."""

    @abstractmethod
    def choose(self, day_sessions: Sequence[Session]) -> Optional[Session]:
        """`day_sessions` is in creation order; None means a new session is needed."""

        raise NotImplementedError
