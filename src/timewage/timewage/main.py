from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from .common.logging_utils import setup_logging
from .container import Container, EngineSettings, build_container
from .database.bootstrap import apply_schema

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "database" / "schema.sql"


def load_engine_settings(settings) -> EngineSettings:
    defaults = EngineSettings()
    return EngineSettings(
        weekly_normal_hours=float(getattr(settings, "WEEKLY_NORMAL_HOURS", defaults.weekly_normal_hours)),
        late_rounding_minutes=int(getattr(settings, "LATE_ROUNDING_MINUTES", defaults.late_rounding_minutes)),
        early_check_in_hours=float(getattr(settings, "EARLY_CHECK_IN_HOURS", defaults.early_check_in_hours)),
        late_check_out_hours=float(getattr(settings, "LATE_CHECK_OUT_HOURS", defaults.late_check_out_hours)),
        week_start_weekday=int(getattr(settings, "WEEK_START_WEEKDAY", defaults.week_start_weekday)),
    )


def create_engine() -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_output=bool(getattr(settings, "LOG_JSON", False)))

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "engine settings loaded",
        extra={
            "settings": settings_module,
            "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        },
    )

    container = build_container(db_config=db_config, settings=load_engine_settings(settings))

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn, schema_path=SCHEMA_PATH)

    return container
