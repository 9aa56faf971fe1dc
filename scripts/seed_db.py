from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from gov_payroll.config import get_settings_module
from gov_payroll.database.bootstrap import apply_seed_sql, ensure_default_admin
from gov_payroll.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    created = ensure_default_admin(db_config)

    print(
        "OK: Seeded database -> "
        f"{DBConfig.from_dict(db_config).describe()}"
        + (" (default admin created)" if created else "")
    )


if __name__ == "__main__":
    main()
