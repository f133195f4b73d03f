from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_dashboard.attendance_dashboard.database.bootstrap import ensure_demo_data
from src.attendance_dashboard.attendance_dashboard.security.crypto import build_field_codecs

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    settings = importlib.import_module(get_settings_module())
    ensure_demo_data(dict(settings.DB_CONFIG), build_field_codecs(getattr(settings, "AUTH_KEY", None)))
    logger.info("Seed finished")


if __name__ == "__main__":
    main()
