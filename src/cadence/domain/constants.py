"""Centralized constants for the Cadence scheduling model.

All literal defaults live here so every layer imports from a single
source of truth.
"""

# ---------- Weekdays (0 = Sunday) ----------
ALL_DAYS = (0, 1, 2, 3, 4, 5, 6)
WEEKLY_DEFAULT_DAYS = (1, 3, 5)  # Mon, Wed, Fri
DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
DAY_LETTERS = ("S", "M", "T", "W", "T", "F", "S")

# ---------- Times per day ----------
MIN_TIMES_PER_DAY = 1
MAX_TIMES_PER_DAY = 10

# ---------- Reminder ----------
DEFAULT_REMINDER_HOUR = 9
DEFAULT_REMINDER_MINUTE = 0
