from __future__ import annotations

import importlib
import logging
import os
from datetime import timedelta
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.datetime_utils import parse_hhmm
from .common.web import register_error_handlers
from .core.constants import DEFAULT_AUTO_PUNCH_OUT_TIME, DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .holidays.controller import register as register_holidays
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .requests.controller import register as register_requests
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    if not log_file:
        return

    root = logging.getLogger()
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5)
    file_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    root.addHandler(file_handler)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    """Application factory.

    A prebuilt container (e.g. in-memory fakes in tests) skips database bootstrap.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)

        auto_punch_out = getattr(settings, "AUTO_PUNCH_OUT_TIME", None)
        container = build_container(
            db_config=db_config,
            auto_punch_out_time=parse_hhmm(auto_punch_out) if auto_punch_out else DEFAULT_AUTO_PUNCH_OUT_TIME,
        )

    app.extensions["staffdesk.container"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_holidays(app, container)
    register_payroll(app, container)
    register_requests(app, container)
    register_tasks(app, container)
    register_reports(app, container)

    return app
