from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import RequestCategory, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, placeholders
from .model import EmployeeRequest
from .repository import RequestRepository

_COLUMNS = "request_id, user_id, category, message, from_date, to_date, status, admin_reply, created_at"


def _to_request(r: Dict[str, Any]) -> EmployeeRequest:
    return EmployeeRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        category=RequestCategory(r["category"]),
        message=r["message"],
        status=RequestStatus(r["status"]),
        from_date=as_date(r["from_date"]) if r.get("from_date") else None,
        to_date=as_date(r["to_date"]) if r.get("to_date") else None,
        admin_reply=r.get("admin_reply"),
        created_at=r.get("created_at"),
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        category: RequestCategory,
        message: str,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_requests(user_id, category, message, from_date, to_date, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), category.value, message, from_date, to_date, RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[EmployeeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employee_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_user(self, user_id: int, *, limit: int = 200) -> Sequence[EmployeeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_requests
                WHERE user_id=%s
                ORDER BY created_at DESC, request_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_for_users(self, user_ids: Sequence[int], *, limit: int = 500) -> Sequence[EmployeeRequest]:
        if not user_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employee_requests
                WHERE user_id IN ({placeholders(user_ids)})
                ORDER BY created_at DESC, request_id DESC
                LIMIT %s
                """,
                tuple(int(u) for u in user_ids) + (int(limit),),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        admin_reply: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employee_requests
                SET status=%s, admin_reply=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, admin_reply, int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def reopen(self, *, request_id: int, status: RequestStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employee_requests
                SET status=%s, admin_reply=NULL
                WHERE request_id=%s AND status=%s
                """,
                (RequestStatus.PENDING.value, int(request_id), status.value),
            )
            return cur.rowcount > 0
