from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def get_by_date(self, holiday_date: date) -> Optional[Holiday]:
        raise NotImplementedError

    def list_between(self, *, start_date: date, end_date: date) -> Sequence[Holiday]:
        raise NotImplementedError

    def create(self, *, holiday_date: date, description: Optional[str] = None) -> int:
        raise NotImplementedError
