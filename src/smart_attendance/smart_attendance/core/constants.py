"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MANUAL_CONFIDENCE = 100
MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100

REMOVED_MEMBER_LABEL = "Removed member"
DEFAULT_CSV_DELIMITER = ","
