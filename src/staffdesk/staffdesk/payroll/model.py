from __future__ import annotations

from dataclasses import dataclass, field

from ..attendance.model import AttendanceRecord


@dataclass(frozen=True)
class AttendanceSummary:
    """One employee's month: day counts, salary and the raw records (newest first)."""

    user_id: int
    year: int
    month: int
    days_in_month: int
    present_days: int
    absent_days: int
    sundays: int
    holidays: int
    base_salary: float
    calculated_salary: float
    attendances: list[AttendanceRecord] = field(default_factory=list)

    @property
    def payable_days(self) -> int:
        return self.present_days + self.sundays + self.holidays

    def to_dict(self, *, include_salary: bool = True) -> dict:
        out = {
            "month": self.month,
            "year": self.year,
            "daysInMonth": self.days_in_month,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "sundays": self.sundays,
            "holidays": self.holidays,
            "payableDays": self.payable_days,
            "attendances": [a.to_dict() for a in self.attendances],
        }
        if include_salary:
            out["baseSalary"] = self.base_salary
            out["calculatedSalary"] = self.calculated_salary
        return out
