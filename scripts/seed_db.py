from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.workforce.workforce.database.bootstrap import DEMO_ACCOUNTS, ensure_demo_accounts


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_accounts(db_config)
    for _name, email, password, role, _wage, _manager in DEMO_ACCOUNTS:
        print(f"OK: {role:<8} {email} / {password}")


if __name__ == "__main__":
    main()
