from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from gov_payroll.config import get_settings_module
from gov_payroll.database.bootstrap import apply_schema, list_tables
from gov_payroll.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{DBConfig.from_dict(db_config).describe()} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
