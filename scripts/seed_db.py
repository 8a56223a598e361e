from __future__ import annotations

import importlib
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from dotenv import load_dotenv

from school_attendance.config import get_settings_module
from school_attendance.container import build_mysql_container
from school_attendance.database.demo import seed_demo_data


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seeded = seed_demo_data(build_mysql_container(db_config=db_config))

    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    if seeded:
        print(f"OK: Seeded database -> {target}")
    else:
        print(f"SKIP: {target} already has users")


if __name__ == "__main__":
    main()
