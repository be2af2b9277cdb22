from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status recorded on a single observation."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class DailyStatus(str, Enum):
    """Consolidated status of one member on one day."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    UNMARKED = "unmarked"


class UnmarkedPolicy(str, Enum):
    """How cohort rollups count members with no observation for the day."""

    COLLAPSE = "collapse"
    KEEP = "keep"


class OverrideTarget(str, Enum):
    """Which session of a day a manual override amends."""

    FIRST = "first"
    LATEST = "latest"
