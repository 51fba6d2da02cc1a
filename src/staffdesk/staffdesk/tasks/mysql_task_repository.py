from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Task
from .repository import TaskRepository

_SELECT = """
    SELECT t.task_id, t.title, t.description, t.created_by, t.status, t.created_at,
           GROUP_CONCAT(ta.user_id ORDER BY ta.user_id) AS assignees
    FROM tasks t
    LEFT JOIN task_assignees ta ON ta.task_id = t.task_id
"""


def _to_task(r: Dict[str, Any]) -> Task:
    assignees = r.get("assignees") or ""
    return Task(
        task_id=int(r["task_id"]),
        title=r["title"],
        description=r["description"],
        created_by=int(r["created_by"]),
        status=TaskStatus(r["status"]),
        assigned_to=tuple(int(x) for x in str(assignees).split(",") if x),
        created_at=r.get("created_at"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, title: str, description: str, created_by: int, assigned_to: Sequence[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO tasks(title, description, created_by, status) VALUES(%s,%s,%s,%s)",
                (title, description, int(created_by), TaskStatus.ONGOING.value),
            )
            task_id = int(cur.lastrowid)
            if assigned_to:
                cur.executemany(
                    "INSERT INTO task_assignees(task_id, user_id) VALUES(%s,%s)",
                    [(task_id, int(u)) for u in assigned_to],
                )
            return task_id

    def get_assigned(self, *, task_id: int, user_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE t.task_id=%s
                  AND EXISTS (SELECT 1 FROM task_assignees x WHERE x.task_id=t.task_id AND x.user_id=%s)
                GROUP BY t.task_id
                """,
                (int(task_id), int(user_id)),
            )
            r = fetchone(cur)
            return _to_task(r) if r else None

    def list_tasks(
        self,
        *,
        status: Optional[TaskStatus] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> Sequence[Task]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("t.status=%s")
            params.append(status.value)
        if created_from is not None:
            clauses.append("t.created_at >= %s")
            params.append(created_from)
        if created_to is not None:
            clauses.append("t.created_at <= %s")
            params.append(created_to)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {where} GROUP BY t.task_id ORDER BY t.created_at DESC, t.task_id DESC",
                tuple(params),
            )
            return [_to_task(r) for r in fetchall(cur)]

    def list_for_assignee(self, user_id: int) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE EXISTS (SELECT 1 FROM task_assignees x WHERE x.task_id=t.task_id AND x.user_id=%s)
                GROUP BY t.task_id
                ORDER BY t.created_at DESC, t.task_id DESC
                """,
                (int(user_id),),
            )
            return [_to_task(r) for r in fetchall(cur)]

    def update_status(self, task_id: int, *, status: TaskStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET status=%s WHERE task_id=%s", (status.value, int(task_id)))
            return cur.rowcount > 0
