from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.travel_desk.travel_desk.container import build_container
from src.travel_desk.travel_desk.core.enums import Role

DEMO_USERS = (
    # user_id, name, password, role, department
    ("h1", "Demo HOD", "p", Role.HOD, "Engineering"),
    ("e1", "Demo Employee", "p", Role.EMPLOYEE, "Engineering"),
    ("d1", "Demo Driver", "p", Role.DRIVER, "Transport"),
)


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    container = build_container(db_config=db_config)

    admin = getattr(settings, "BOOTSTRAP_ADMIN", None)
    if admin:
        container.user_service.ensure_bootstrap_admin(
            user_id=admin["user_id"],
            password=admin["password"],
            name=admin.get("name", "Admin"),
            department=admin.get("department", "Administration"),
        )

    created = 0
    for user_id, name, password, role, department in DEMO_USERS:
        if container.users_repo.get_by_user_id(user_id):
            continue
        container.user_service.create_account(
            user_id=user_id, name=name, password=password, role=role, department=department
        )
        created += 1

    print(
        "OK: Seeded demo users -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(created={created})"
    )


if __name__ == "__main__":
    main()
