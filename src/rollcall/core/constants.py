"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_HOURS = 2.0
MIN_SESSION_HOURS = 1.0

RISK_MEDIUM_HOURS = 5
RISK_HIGH_HOURS = 10
RISK_CRITICAL_HOURS = 15

# Cache keys shared with the roll-call clients.
CACHE_KEY_ABSENTEE_HOURS = "rollcall_cached_absentee_hours"
CACHE_KEY_REPORTS = "rollcall_cached_reports"
CACHE_KEY_ABSENTEE_RECORDS = "rollcall_absentee_records"
