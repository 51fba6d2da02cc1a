"""Monthly attendance aggregation and pro-rated salary.

Every calendar day of the month is classified exactly once, first match wins:

    Sunday > holiday > present record > absent

so a holiday on a Sunday counts as a Sunday and a punch-in on a Sunday or holiday
is not paid twice. The four counts always add up to the number of days in the month.
"""
from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.access import ensure_active
from ..common.datetime_utils import days_in_month, is_sunday, iter_days, month_bounds
from ..core.enums import AccountStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..holidays.repository import HolidayRepository
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import ProRataSalaryCalculator
from .model import AttendanceSummary


@dataclass(frozen=True)
class DayCounts:
    present: int
    absent: int
    sundays: int
    holidays: int


def classify_month(
    year: int,
    month: int,
    records: Iterable[AttendanceRecord],
    holiday_dates: Collection[date],
) -> DayCounts:
    present_dates = {r.work_date for r in records if r.is_present}
    holiday_dates = set(holiday_dates)

    present = absent = sundays = holidays = 0
    for day in iter_days(*month_bounds(year, month)):
        if is_sunday(day):
            sundays += 1
        elif day in holiday_dates:
            holidays += 1
        elif day in present_dates:
            present += 1
        else:
            absent += 1

    return DayCounts(present=present, absent=absent, sundays=sundays, holidays=holidays)


class MonthlyAttendanceService:
    """Read-only aggregator over the punch ledger, holiday calendar and employee directory."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        holidays: HolidayRepository,
        users: UserRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._holidays = holidays
        self._users = users
        self._calculator = calculator or ProRataSalaryCalculator()

    def compute_monthly_attendance(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        caller_id: int,
        user_id: int,
        month: int,
        year: int,
    ) -> AttendanceSummary:
        ensure_active(current_role, current_status)
        if current_role != Role.ADMIN and int(caller_id) != int(user_id):
            raise AuthorizationError("Admin access required")

        user = self._users.get_approved(int(user_id))
        if not user:
            raise NotFoundError("Approved employee not found")

        start, end = month_bounds(year, month)
        records = list(self._attendance.list_for_user_between(user.user_id, start_date=start, end_date=end))
        records.sort(key=lambda r: r.work_date, reverse=True)
        holiday_dates = {h.holiday_date for h in self._holidays.list_between(start_date=start, end_date=end)}

        counts = classify_month(year, month, records, holiday_dates)
        total_days = days_in_month(year, month)
        payable_days = counts.present + counts.sundays + counts.holidays
        base_salary = float(user.salary or 0)

        return AttendanceSummary(
            user_id=user.user_id,
            year=year,
            month=month,
            days_in_month=total_days,
            present_days=counts.present,
            absent_days=counts.absent,
            sundays=counts.sundays,
            holidays=counts.holidays,
            base_salary=base_salary,
            calculated_salary=self._calculator.payable_amount(
                base_salary=base_salary,
                days_in_month=total_days,
                payable_days=payable_days,
            ),
            attendances=records,
        )

    def get_my_attendance(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        user_id: int,
        month: int,
        year: int,
    ) -> AttendanceSummary:
        return self.compute_monthly_attendance(
            current_role=current_role,
            current_status=current_status,
            caller_id=user_id,
            user_id=user_id,
            month=month,
            year=year,
        )
