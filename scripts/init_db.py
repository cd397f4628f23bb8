from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from hamkke_hr.config import get_settings_module
from hamkke_hr.database.bootstrap import apply_schema


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    count = apply_schema(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(statements={count})"
    )


if __name__ == "__main__":
    main()
