"""Shared settings helpers for the per-environment modules."""
import os


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "travel_desk"),
    }


def bootstrap_admin_from_env(default_password: str) -> dict:
    return {
        "user_id": os.getenv("ADMIN_USER_ID", "admin"),
        "password": os.getenv("ADMIN_PASSWORD", default_password),
        "name": os.getenv("ADMIN_NAME", "Admin"),
        "department": os.getenv("ADMIN_DEPARTMENT", "Administration"),
    }
