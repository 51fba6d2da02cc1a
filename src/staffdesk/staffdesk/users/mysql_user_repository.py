from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import AccountStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = """
    user_id, email, password_hash, name, role, status,
    phone, address, position, salary, created_at
"""


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        name=row["name"],
        role=Role(row["role"]),
        status=AccountStatus(row["status"]),
        phone=row.get("phone"),
        address=row.get("address"),
        position=row.get("position"),
        salary=as_float(row.get("salary")) or 0.0,
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_approved(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE user_id=%s AND status=%s",
                (int(user_id), AccountStatus.APPROVED.value),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_by_role_and_status(
        self,
        *,
        role: Role,
        status: AccountStatus,
        name_contains: Optional[str] = None,
    ) -> Sequence[User]:
        clauses = ["role=%s", "status=%s"]
        params: list[object] = [role.value, status.value]
        if name_contains:
            # Default collation is case-insensitive.
            clauses.append("name LIKE %s")
            params.append(f"%{name_contains}%")

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE {where} ORDER BY name, user_id",
                tuple(params),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        role: Role,
        status: AccountStatus,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        position: Optional[str] = None,
        salary: float = 0.0,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(email, password_hash, name, role, status, phone, address, position, salary)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (email, password_hash, name, role.value, status.value, phone, address, position, salary),
            )
            return int(cur.lastrowid)

    def update_profile(
        self,
        user_id: int,
        *,
        name: str,
        phone: Optional[str],
        address: Optional[str],
        position: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET name=%s, phone=%s, address=%s, position=%s
                WHERE user_id=%s
                """,
                (name, phone, address, position, int(user_id)),
            )
            return cur.rowcount > 0

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def update_status(self, user_id: int, *, status: AccountStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET status=%s WHERE user_id=%s", (status.value, int(user_id)))
            return cur.rowcount > 0

    def update_salary(self, user_id: int, *, salary: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET salary=%s WHERE user_id=%s AND status=%s",
                (salary, int(user_id), AccountStatus.APPROVED.value),
            )
            return cur.rowcount > 0
