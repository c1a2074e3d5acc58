from flask import Blueprint, jsonify

from ..common import get_repository

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health():
    repo = get_repository()
    return jsonify({
        "status": "OK",
        "message": "Server is running",
        "mode": repo.mode,
        "firestore_connected": repo.is_document_store,
        "data_available": repo.counts(),
    }), 200
