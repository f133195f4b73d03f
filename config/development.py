import os

from .config import AUTH_KEY, RBAC_CONFIG, SALARY_CALC_DAY, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

# Never use this key outside local development.
AUTH_KEY = AUTH_KEY or "dev-auth-key"

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo users and the default work week on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

__all__ = [
    "SECRET_KEY",
    "DB_CONFIG",
    "AUTH_KEY",
    "SALARY_CALC_DAY",
    "RBAC_CONFIG",
    "LOG_LEVEL",
    "DEBUG",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
]
