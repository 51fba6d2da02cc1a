from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.access import ensure_active, ensure_admin
from ..common.datetime_utils import month_bounds, to_day
from ..common.validators import optional_text
from ..core.enums import AccountStatus, Role
from ..core.exceptions import ValidationError
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def mark_holiday(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        holiday_date: date | datetime,
        description: Optional[str] = None,
    ) -> int:
        ensure_admin(current_role, current_status)
        day = to_day(holiday_date)

        if self._holidays.get_by_date(day):
            raise ValidationError("Holiday already marked for this date")

        holiday_id = self._holidays.create(holiday_date=day, description=optional_text(description))
        logger.info("Holiday marked on %s", day.isoformat())
        return holiday_id

    def list_holidays(
        self,
        *,
        current_role: Role,
        current_status: AccountStatus,
        year: int,
        month: Optional[int] = None,
    ) -> list[dict]:
        ensure_active(current_role, current_status)
        if month is None:
            start, end = date(year, 1, 1), date(year, 12, 31)
        else:
            start, end = month_bounds(year, month)
        return [h.to_dict() for h in self._holidays.list_between(start_date=start, end_date=end)]
