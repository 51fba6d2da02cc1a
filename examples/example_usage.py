"""Example: calling the service layer directly, without Flask.

Logs in as the seeded demo employee and prints this month's attendance summary.
Run scripts/init_db.py and scripts/seed_db.py first.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.staffdesk.staffdesk.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    user = container.auth_service.authenticate("employee@staffdesk.local", "employee123")
    today = date.today()
    summary = container.monthly_attendance_service.get_my_attendance(
        current_role=user.role,
        current_status=user.status,
        user_id=user.user_id,
        month=today.month,
        year=today.year,
    )
    print(summary.to_dict())


if __name__ == "__main__":
    main()
