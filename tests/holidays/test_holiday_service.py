from __future__ import annotations

from datetime import date, datetime

import pytest

from src.staffdesk.staffdesk.core.enums import AccountStatus, Role
from src.staffdesk.staffdesk.core.exceptions import AuthorizationError, ValidationError
from src.staffdesk.staffdesk.holidays.service import HolidayService

ADMIN = {"current_role": Role.ADMIN, "current_status": AccountStatus.APPROVED}
EMPLOYEE = {"current_role": Role.EMPLOYEE, "current_status": AccountStatus.APPROVED}


@pytest.fixture
def service(holidays_repo):
    return HolidayService(holidays_repo)


def test_mark_holiday_normalizes_timestamp(service, holidays_repo):
    service.mark_holiday(**ADMIN, holiday_date=datetime(2025, 8, 15, 14, 30), description="Independence Day")

    holiday = holidays_repo.get_by_date(date(2025, 8, 15))
    assert holiday.description == "Independence Day"


def test_one_holiday_per_date(service):
    service.mark_holiday(**ADMIN, holiday_date=date(2025, 8, 15))
    with pytest.raises(ValidationError, match="already marked"):
        service.mark_holiday(**ADMIN, holiday_date=date(2025, 8, 15), description="again")


def test_only_admin_marks_holidays(service):
    with pytest.raises(AuthorizationError):
        service.mark_holiday(**EMPLOYEE, holiday_date=date(2025, 8, 15))


def test_list_by_year_and_month(service):
    service.mark_holiday(**ADMIN, holiday_date=date(2025, 1, 1), description="New Year")
    service.mark_holiday(**ADMIN, holiday_date=date(2025, 1, 26))
    service.mark_holiday(**ADMIN, holiday_date=date(2025, 5, 1))
    service.mark_holiday(**ADMIN, holiday_date=date(2026, 1, 1))

    assert [h["date"] for h in service.list_holidays(**EMPLOYEE, year=2025)] == [
        "2025-01-01",
        "2025-01-26",
        "2025-05-01",
    ]
    assert [h["date"] for h in service.list_holidays(**EMPLOYEE, year=2025, month=1)] == ["2025-01-01", "2025-01-26"]
