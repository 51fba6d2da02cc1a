from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus, WorkType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, as_float, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, user_id, work_date, punch_in, punch_out, total_hours, status, work_type"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=as_date(r["work_date"]),
        status=AttendanceStatus(r["status"]),
        punch_in=r.get("punch_in"),
        punch_out=r.get("punch_out"),
        total_hours=as_float(r.get("total_hours")),
        work_type=WorkType(r["work_type"]) if r.get("work_type") else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_user_between(self, user_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date DESC
                """,
                (int(user_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE work_date=%s", (work_date,))
            return [_to_record(r) for r in fetchall(cur)]

    def record_punch_in(self, *, user_id: int, work_date: date, punch_in: datetime) -> None:
        # MySQL applies the assignments left to right: status must read the old punch_in.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, work_date, punch_in, status, work_type)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=IF(punch_in IS NULL, VALUES(status), status),
                    punch_in=IF(punch_in IS NULL, VALUES(punch_in), punch_in)
                """,
                (
                    int(user_id),
                    work_date,
                    punch_in,
                    AttendanceStatus.PRESENT.value,
                    WorkType.OFFICE.value,
                ),
            )

    def record_punch_out(self, *, attendance_id: int, punch_out: datetime, total_hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_out=%s, total_hours=%s
                WHERE attendance_id=%s AND punch_in IS NOT NULL AND punch_out IS NULL
                """,
                (punch_out, total_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_open_punches(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE work_date=%s AND punch_in IS NOT NULL AND punch_out IS NULL
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert_days(
        self,
        *,
        user_id: int,
        days: Iterable[date],
        status: AttendanceStatus,
        work_type: WorkType,
    ) -> int:
        rows = [(int(user_id), d, status.value, work_type.value) for d in days]
        if not rows:
            return 0

        # Single db_cursor block: every day commits together or not at all.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(user_id, work_date, status, work_type)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), work_type=VALUES(work_type)
                """,
                rows,
            )
        return len(rows)
