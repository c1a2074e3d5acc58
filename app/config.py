# app/config.py
from __future__ import annotations
import os


def _int_env(name: str, default: int) -> int:
    """
    Read an integer from the environment, ignoring blanks.
    Slot pool sizes differ per deployment (2 bays on the first
    workshop, 3 on the newer one), so they come from env.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JSON_SORT_KEYS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    PORT = _int_env("PORT", 5000)

    # auto = Firestore when credentials load, JSON file otherwise
    STORE_BACKEND = os.getenv("STORE_BACKEND", "auto").lower()
    FIREBASE_CREDENTIALS_JSON = os.getenv("FIREBASE_CREDENTIALS_JSON")
    FIREBASE_CREDENTIALS_PATH = os.getenv("FIREBASE_CREDENTIALS_PATH", "serviceAccountKey.json")
    SEED_DATA_PATH = os.getenv("SEED_DATA_PATH", "seedData.json")

    REPAIR_SLOT_COUNT = _int_env("REPAIR_SLOT_COUNT", 2)
    WAITING_SLOT_COUNT = _int_env("WAITING_SLOT_COUNT", 2)


class ProductionConfig(Config):
    # Production never dies on a missing store: it degrades to the JSON file
    pass


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()


class TestingConfig(Config):
    TESTING = True
    STORE_BACKEND = "json"
    SEED_DATA_PATH = None
    FIREBASE_CREDENTIALS_JSON = None
    REPAIR_SLOT_COUNT = 2
    WAITING_SLOT_COUNT = 2
