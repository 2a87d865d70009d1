"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

# (id, label) in display order. Staff records and timetables use the label.
SCHOOL_CLASSES = (
    ("1", "Class 1"),
    ("2", "Class 2"),
    ("3", "Class 3"),
    ("4", "Class 4"),
    ("5", "Class 5"),
    ("6", "Class 6"),
    ("7", "Class 7"),
    ("8", "Class 8"),
    ("9", "Class 9"),
    ("10", "Class 10"),
    ("11-science", "11th Science"),
    ("11-commerce", "11th Commerce"),
    ("12-science", "12th Science"),
    ("12-commerce", "12th Commerce"),
)

CLASS_LABELS = tuple(label for _, label in SCHOOL_CLASSES)

TIME_SLOTS = (
    "08:40 AM - 09:20 AM",
    "09:20 AM - 10:00 AM",
    "10:00 AM - 10:40 AM",
    "10:40 AM - 11:20 AM",
    "11:20 AM - 12:00 PM",
    "12:00 PM - 12:40 PM",
    "12:40 PM - 01:20 PM",
    "01:20 PM - 02:00 PM",
    "02:00 PM - 02:20 PM",
    "02:20 PM - 03:00 PM",
    "03:00 PM - 03:40 PM",
)

LUNCH_SLOT = "12:40 PM - 01:20 PM"
SHORT_SLOT = "02:00 PM - 02:20 PM"
REMEDIAL_SLOTS = ("02:20 PM - 03:00 PM", "03:00 PM - 03:40 PM")
LUNCH_MARKER = "LUNCH"

STAFF_ID_SUFFIX_DIGITS = 6
STAFF_ID_MAX_ATTEMPTS = 5
MIN_FULL_NAME_LENGTH = 3

DEFAULT_AI_TIMEOUT_SECONDS = 60
MAX_SELFIE_BYTES = 5 * 1024 * 1024
