import os

from config.config import bootstrap_admin_from_env, db_config_from_env

SECRET_KEY = os.getenv("SESSION_SECRET", "please-set-SESSION_SECRET")

DB_CONFIG = db_config_from_env()

DEBUG = False

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "1"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# Only provisioned when a password is supplied
BOOTSTRAP_ADMIN = bootstrap_admin_from_env("") if os.getenv("ADMIN_PASSWORD") else None
