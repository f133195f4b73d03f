"""Settings shared by every environment, read from the process environment.

``.env`` is loaded by ``create_app`` before a settings module is imported.
"""
import json
import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


def rbac_from_env(raw: str | None) -> dict:
    """RBAC_CONFIG is a JSON object: {"/page": ["HRD", "USER"], ...}."""
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"RBAC_CONFIG is not valid JSON: {e}") from e
    if not isinstance(value, dict):
        raise ValueError("RBAC_CONFIG must be a JSON object")
    return value


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.environ.get("DB_HOST", "localhost"),
        "port": int(os.environ.get("DB_PORT", "3306")),
        "user": os.environ.get("DB_USER", "root"),
        "password": os.environ.get("DB_PASSWORD", default_password),
        "database": os.environ.get("DB_NAME", "attendance_dashboard"),
    }


AUTH_KEY = os.environ.get("AUTH_KEY")
SALARY_CALC_DAY = int(os.environ.get("SALARY_CALC_DAY", "25"))
RBAC_CONFIG = rbac_from_env(os.environ.get("RBAC_CONFIG"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
