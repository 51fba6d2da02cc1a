from __future__ import annotations

from abc import ABC, abstractmethod


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def payable_amount(self, *, base_salary: float, days_in_month: int, payable_days: int) -> float:
        raise NotImplementedError
