from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import OverrideTarget
from ..core.exceptions import ValidationError
from .strategies.base import OverrideTargetStrategy
from .strategies.first_session_strategy import FirstSessionStrategy
from .strategies.latest_session_strategy import LatestSessionStrategy


@dataclass
class OverrideStrategyFactory:
    """Factory Pattern: map the configured override target to its strategy."""

    def for_target(self, target: OverrideTarget | str) -> OverrideTargetStrategy:
        try:
            target = OverrideTarget(target)
        except ValueError:
            raise ValidationError(f"Unknown override target: {target!r}")

        if target == OverrideTarget.LATEST:
            return LatestSessionStrategy()
        return FirstSessionStrategy()
