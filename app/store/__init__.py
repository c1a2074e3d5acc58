# app/store/__init__.py
from __future__ import annotations

import json
import logging
import os
from typing import Mapping, Optional

from .base import DocumentRepository
from .firestore import FirestoreRepository
from .json_file import JsonFileRepository

logger = logging.getLogger(__name__)

__all__ = [
    "DocumentRepository",
    "FirestoreRepository",
    "JsonFileRepository",
    "build_repository",
    "load_firebase_credentials",
]


def load_firebase_credentials(config: Mapping) -> Optional[dict]:
    """
    Service-account info, first from FIREBASE_CREDENTIALS_JSON (hosted
    deployments), then from the FIREBASE_CREDENTIALS_PATH file (local dev).
    """
    raw = config.get("FIREBASE_CREDENTIALS_JSON")
    if raw:
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.error("Could not parse FIREBASE_CREDENTIALS_JSON: %s", e)

    path = config.get("FIREBASE_CREDENTIALS_PATH")
    if path and os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as e:
            logger.error("Could not read %s: %s", path, e)
    return None


def _firestore_client(credentials_info: dict):
    import firebase_admin
    from firebase_admin import credentials, firestore

    try:
        fb_app = firebase_admin.get_app()
    except ValueError:
        fb_app = firebase_admin.initialize_app(credentials.Certificate(credentials_info))
    return firestore.client(fb_app)


def build_repository(config: Mapping) -> DocumentRepository:
    """Pick the backing store once, at startup. Firestore problems degrade to the JSON file."""
    backend = (config.get("STORE_BACKEND") or "auto").lower()

    if backend in ("auto", "firestore"):
        info = load_firebase_credentials(config)
        if info:
            try:
                repo = FirestoreRepository(_firestore_client(info))
                logger.info("Firebase Firestore initialised")
                return repo
            except Exception as e:
                logger.warning("Firestore unavailable, using the JSON file instead: %s", e)
        else:
            logger.warning("No Firebase credentials found, using the JSON file instead")

    return JsonFileRepository(config.get("SEED_DATA_PATH"))
