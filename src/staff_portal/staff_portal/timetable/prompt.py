from __future__ import annotations

import json

from ..core.constants import LUNCH_MARKER, LUNCH_SLOT, REMEDIAL_SLOTS, SHORT_SLOT, TIME_SLOTS
from .model import TimetableInput

SYSTEM_PROMPT = "You are an expert school administrator responsible for creating the daily class schedule."


def _teaching_slots() -> str:
    lines = []
    for slot in TIME_SLOTS:
        if slot == LUNCH_SLOT or slot in REMEDIAL_SLOTS:
            continue
        if slot == SHORT_SLOT:
            lines.append(f"    - {slot} (Note: This is a shorter 20-minute period, assign a core subject if possible.)")
        else:
            lines.append(f"    - {slot}")
    return "\n".join(lines)


def render_prompt(request: TimetableInput) -> str:
    """The user message sent to the model; rules first, then the input JSON."""

    payload = request.to_payload()
    lunch = json.dumps({"teacher": LUNCH_MARKER, "subject": LUNCH_MARKER})
    slot_keys = json.dumps(list(TIME_SLOTS))

    return f"""Your task is to generate a complete, conflict-free timetable for all classes based on the list of teachers who are present today.

**Constraints and Rules:**
1.  **School Hours:** The main school day runs from 8:40 AM to 2:20 PM.
2.  **Period Duration:** Each teaching period is exactly 40 minutes.
3.  **Time Slots:**
{_teaching_slots()}
4.  **Lunch Break:** There is a mandatory lunch break from 12:40 PM to 01:20 PM for all classes and teachers. The output for the "{LUNCH_SLOT}" slot MUST be `{lunch}`.
5.  **Remedial Classes:** There are two remedial class slots after the main school day: {REMEDIAL_SLOTS[0]} and {REMEDIAL_SLOTS[1]}. These should be assigned to teachers for specific classes, prioritizing core subjects like Maths, Science, and English for older classes (9th and above).
6.  **Teacher Assignments:**
    *   A teacher can only teach ONE class at a time. There must be no double-booking.
    *   Assign teachers to classes they are qualified for, as specified in their `classes` list.
    *   Assign teachers to subjects they teach, as specified in their `subject` field.
    *   Distribute teachers as evenly as possible. Avoid giving one teacher too many back-to-back classes if others are free.
    *   Every time slot (except lunch) for every class MUST be assigned a teacher. If there are not enough teachers, you must creatively and logically re-assign teachers to subjects they might be able to handle (e.g., a Physics teacher might take a general Science class for a younger grade) or assign a teacher for a 'library' or 'study hall' period. Do not leave any slot unassigned.

**Input Data:**
-   **Present Teachers:** A list of all teachers available for scheduling today, including their name, main subject, and the classes they can teach.
-   **All Classes:** A list of all classes in the school that require a full-day schedule.

**Your Task:**
Generate a JSON object where each key is a class name from the `allClasses` list. The value for each key must be a JSON object whose keys are exactly these time slots: {slot_keys}. Each value is an object with string fields "teacher" (the teacher's full name) and "subject".
Return ONLY valid JSON (no markdown, no extra text, no explanation).

**Present Teachers:**
```json
{json.dumps(payload["presentTeachers"], indent=2)}
```

**All Classes to Schedule:**
```json
{json.dumps(payload["allClasses"], indent=2)}
```
"""
