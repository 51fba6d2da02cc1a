from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, WorkType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user_between(self, user_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Records with start_date <= work_date <= end_date, newest day first."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def record_punch_in(self, *, user_id: int, work_date: date, punch_in: datetime) -> None:
        """Insert today's record, or fill punch_in on an existing record that has none.

        Never overwrites an existing punch_in.
        """

        raise NotImplementedError

    def record_punch_out(self, *, attendance_id: int, punch_out: datetime, total_hours: float) -> bool:
        """Sets punch_out only when it is still empty."""

        raise NotImplementedError

    def list_open_punches(self, work_date: date) -> Sequence[AttendanceRecord]:
        """Records of the day with punch_in but no punch_out."""

        raise NotImplementedError

    def upsert_days(
        self,
        *,
        user_id: int,
        days: Iterable[date],
        status: AttendanceStatus,
        work_type: WorkType,
    ) -> int:
        """Write (status, work_type) for every day in one transaction (all or nothing).

        Existing records for those days are overwritten.
        """

        raise NotImplementedError
