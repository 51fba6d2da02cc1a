"""Close attendance records left without a punch-out.

Meant for a nightly cron job; by default it closes yesterday.

    python scripts/auto_punch_out.py [YYYY-MM-DD]
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.staffdesk.staffdesk.common.datetime_utils import parse_hhmm, parse_iso_date
from src.staffdesk.staffdesk.container import build_container


def main(argv: list[str]) -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    settings = importlib.import_module(get_settings_module())

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        auto_punch_out_time=parse_hhmm(getattr(settings, "AUTO_PUNCH_OUT_TIME", "23:59")),
    )
    work_date = parse_iso_date(argv[0]) if argv else None
    closed = container.attendance_service.close_open_punches(work_date)
    print(f"OK: closed {closed} open punch(es)")


if __name__ == "__main__":
    main(sys.argv[1:])
