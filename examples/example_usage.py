"""Example: use the service layer directly (without Flask).

Prints today's organisation snapshot and the first page of the daily log
as seen by the demo admin account.
"""

import importlib

from config import get_settings_module

from src.timekeeper.timekeeper.container import build_container
from src.timekeeper.timekeeper.daily_log.model import row_to_dict
from src.timekeeper.timekeeper.users.service import to_identity


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, secret_key=settings.SECRET_KEY)

    admin = container.users_repo.get_by_email("admin@example.com")
    if admin is None:
        raise SystemExit("Run scripts/seed_db.py first")

    caller = to_identity(admin)
    print(container.statistics_service.org_snapshot(caller))
    for row in container.daily_log_service.build_daily_log(caller, page=1, page_size=5).rows:
        print(row_to_dict(row))


if __name__ == "__main__":
    main()
