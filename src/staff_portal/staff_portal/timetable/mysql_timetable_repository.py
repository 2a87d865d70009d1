from __future__ import annotations

import json
from datetime import date, datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Timetable
from .repository import TimetableRepository


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, work_date: date) -> Optional[Timetable]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM timetables WHERE work_date=%s", (work_date,))
            r = fetchone(cur)
            if not r:
                return None
            payload = r["payload"]
            if isinstance(payload, (bytes, bytearray)):
                payload = payload.decode("utf-8")
            return Timetable.model_validate(json.loads(payload) if isinstance(payload, str) else payload)

    def upsert(self, work_date: date, timetable: Timetable) -> None:
        payload = json.dumps(timetable.to_payload(), ensure_ascii=False)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetables(work_date, payload, published_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload), published_at=VALUES(published_at)
                """,
                (work_date, payload, datetime.now()),
            )
