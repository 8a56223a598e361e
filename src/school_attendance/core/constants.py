"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Late arrivals count as half an absence in reports.
LATE_WEIGHT = 0.5

MAX_CERTIFICATE_BYTES = 5 * 1024 * 1024
CERTIFICATE_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "application/pdf": "pdf",
}
CERTIFICATE_PREFIX = "certificates"

DEFAULT_COURSE_ICON = "/vite.svg"
DEFAULT_TOP_ABSENTEES = 5
UNKNOWN_AUTHOR = "Unknown"

# Usage thresholds (percent of max_absences) for course summaries.
WARNING_USAGE_PERCENT = 50
DANGER_USAGE_PERCENT = 80
