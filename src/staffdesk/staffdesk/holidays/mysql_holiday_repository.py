from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository


def _to_holiday(r: Dict[str, Any]) -> Holiday:
    return Holiday(
        holiday_id=int(r["holiday_id"]),
        holiday_date=as_date(r["holiday_date"]),
        description=r.get("description"),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_date(self, holiday_date: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT holiday_id, holiday_date, description FROM holidays WHERE holiday_date=%s",
                (holiday_date,),
            )
            r = fetchone(cur)
            return _to_holiday(r) if r else None

    def list_between(self, *, start_date: date, end_date: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, holiday_date, description
                FROM holidays
                WHERE holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date ASC
                """,
                (start_date, end_date),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def create(self, *, holiday_date: date, description: Optional[str] = None) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO holidays(holiday_date, description) VALUES(%s,%s)",
                    (holiday_date, description),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            # Unique key on holiday_date: a concurrent insert won.
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ValidationError("Holiday already marked for this date") from e
            raise
