from __future__ import annotations

from .base import PayrollCalculator


class ProRataSalaryCalculator(PayrollCalculator):
    """Standard rule: monthly salary / days in month * payable days, rounded to 2 decimals."""

    def payable_amount(self, *, base_salary: float, days_in_month: int, payable_days: int) -> float:
        if days_in_month <= 0:
            return 0.0
        return round(float(base_salary) / days_in_month * payable_days, 2)
