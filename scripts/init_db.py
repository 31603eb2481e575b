from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timewage.timewage.common.logging_utils import setup_logging
from src.timewage.timewage.database.bootstrap import apply_schema
from src.timewage.timewage.database.connection import DBConfig, DatabaseConnection
from src.timewage.timewage.main import SCHEMA_PATH


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    count = apply_schema(DatabaseConnection(DBConfig.from_dict(db_config)), schema_path=SCHEMA_PATH)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(statements={count})"
    )


if __name__ == "__main__":
    main()
