from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, placeholders
from .model import WorkReport
from .repository import ReportRepository


def _to_report(r: Dict[str, Any]) -> WorkReport:
    return WorkReport(
        report_id=int(r["report_id"]),
        user_id=int(r["user_id"]),
        summary=r["summary"],
        status=TaskStatus(r["status"]),
        task_id=int(r["task_id"]) if r.get("task_id") else None,
        task_title=r.get("task_title"),
        created_at=r.get("created_at"),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        summary: str,
        status: TaskStatus,
        task_id: Optional[int] = None,
        task_title: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_reports(user_id, task_id, task_title, summary, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), task_id, task_title, summary, status.value),
            )
            return int(cur.lastrowid)

    def list_for_users(
        self,
        user_ids: Sequence[int],
        *,
        status: Optional[TaskStatus] = None,
    ) -> Sequence[WorkReport]:
        if not user_ids:
            return []

        clauses = [f"user_id IN ({placeholders(user_ids)})"]
        params: list[object] = [int(u) for u in user_ids]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT report_id, user_id, task_id, task_title, summary, status, created_at
                FROM work_reports
                WHERE {where}
                ORDER BY created_at DESC, report_id DESC
                """,
                tuple(params),
            )
            return [_to_report(r) for r in fetchall(cur)]
