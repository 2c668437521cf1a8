# bazaars/utils.py
"""Shared utilities: logging setup and small time helpers."""
import os
import logging
from datetime import datetime, timezone
from dotenv import load_dotenv

load_dotenv()

def get_logger(name=__name__):
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        level=getattr(logging, level, logging.INFO)
    )
    return logging.getLogger(name)

logger = get_logger("bazaars")

def utcnow() -> datetime:
    # ads timestamps are stored without a time zone, always in UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)

def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")
