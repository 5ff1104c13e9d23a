import os

from config.config import bootstrap_admin_from_env, db_config_from_env

SECRET_KEY = os.getenv("SESSION_SECRET", "dev-secret-key")

DB_CONFIG = db_config_from_env()

DEBUG = True

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "1"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Created once at startup when missing
BOOTSTRAP_ADMIN = bootstrap_admin_from_env("123")
