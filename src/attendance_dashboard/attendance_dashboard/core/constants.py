"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Role

ADMIN_ROLES = frozenset({Role.ADMIN, Role.HRD})

DEFAULT_SALARY_CALC_DAY = 25

# Work schedules number days 0 = Sunday ... 6 = Saturday.
SUNDAY = 0

# Imported clock events before this minute of day are clock-ins, the rest clock-outs.
CLOCK_OUT_THRESHOLD_MINUTES = 12 * 60

DEFAULT_WORK_SCHEDULE = (
    # (day_of_week, day_name, start_time, end_time, is_work_day); 0 = Sunday
    (0, "Minggu", None, None, False),
    (1, "Senin", "08:00", "17:00", True),
    (2, "Selasa", "08:00", "17:00", True),
    (3, "Rabu", "08:00", "17:00", True),
    (4, "Kamis", "08:00", "17:00", True),
    (5, "Jumat", "08:00", "17:00", True),
    (6, "Sabtu", None, None, False),
)
