from __future__ import annotations

import importlib

from school_attendance.config import get_settings_module
from school_attendance.database.bootstrap import apply_seed_sql
from school_attendance.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
