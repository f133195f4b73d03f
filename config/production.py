import os

from .config import AUTH_KEY, LOG_LEVEL, RBAC_CONFIG, SALARY_CALC_DAY, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
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
