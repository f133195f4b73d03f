from .config import RBAC_CONFIG, SALARY_CALC_DAY, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

AUTH_KEY = "test-auth-key"

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

__all__ = [
    "SECRET_KEY",
    "DB_CONFIG",
    "AUTH_KEY",
    "SALARY_CALC_DAY",
    "RBAC_CONFIG",
    "LOG_LEVEL",
    "DEBUG",
    "TESTING",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
]
