from __future__ import annotations

from collections import defaultdict

from ..core.constants import CLASS_LABELS, LUNCH_SLOT, TIME_SLOTS
from .model import Timetable


def find_conflicts(timetable: Timetable) -> list[dict]:
    """List problems a reviewer should look at before publishing.

    Reports teachers booked into more than one class in the same slot and
    non-lunch slots left without a teacher or subject. Advisory only.
    """

    order = {c: i for i, c in enumerate(CLASS_LABELS)}
    classes = sorted(timetable.classes, key=lambda c: order.get(c, len(order)))
    problems: list[dict] = []

    for slot in TIME_SLOTS:
        if slot == LUNCH_SLOT:
            continue

        booked: dict[str, list[str]] = defaultdict(list)
        for class_name in classes:
            entry = timetable.entry(class_name, slot)
            if entry is None or not entry.teacher.strip() or not entry.subject.strip():
                problems.append({"kind": "unassigned", "slot": slot, "classes": [class_name]})
                continue
            booked[entry.teacher.strip()].append(class_name)

        for teacher, booked_classes in booked.items():
            if len(booked_classes) > 1:
                problems.append(
                    {"kind": "double_booked", "slot": slot, "teacher": teacher, "classes": booked_classes}
                )

    return problems
