from flask import Blueprint, current_app, jsonify

from app.store.base import REPAIR_COMPLETIONS
from ..common import (
    get_or_404,
    get_repository,
    load_body,
    now,
    requires_document_store,
    update_or_404,
)
from .schemas import CompletionSchema, CompletionUpdateSchema

completions_bp = Blueprint('repair_completions', __name__)
completion_schema = CompletionSchema()
completion_update_schema = CompletionUpdateSchema()


@completions_bp.route('/', methods=['GET'])
def list_completions():
    return jsonify(get_repository().list(REPAIR_COMPLETIONS)), 200


# older clients read the same list from /api/finReparation
fin_reparation_bp = Blueprint('fin_reparation', __name__)
fin_reparation_bp.add_url_rule('/', view_func=list_completions, methods=['GET'])


@completions_bp.route('/repair/<repair_id>', methods=['GET'])
def list_completions_by_repair(repair_id):
    return jsonify(get_repository().filter_by(REPAIR_COMPLETIONS, "repair.id", repair_id)), 200


@completions_bp.route('/reset', methods=['GET'])
def reset_completions():
    """Empty the collection in either mode; the JSON file is rewritten."""
    repo = get_repository()
    deleted = repo.clear(REPAIR_COMPLETIONS)
    current_app.logger.info("Repair completions reset (%s): %d deleted", repo.mode, deleted)
    return jsonify({"message": "Repair completions emptied", "mode": repo.mode, "deleted": deleted}), 200


@completions_bp.route('/<completion_id>', methods=['GET'])
def get_completion(completion_id):
    return jsonify(get_or_404(REPAIR_COMPLETIONS, completion_id, "Repair completion")), 200


@completions_bp.route('/', methods=['POST'])
@requires_document_store
def create_completion():
    data = load_body(completion_schema)
    doc = get_repository().add(REPAIR_COMPLETIONS, {**data, "created_at": now()})
    return jsonify(doc), 201


@completions_bp.route('/<completion_id>', methods=['PUT'])
@requires_document_store
def update_completion(completion_id):
    data = load_body(completion_update_schema)
    doc = update_or_404(REPAIR_COMPLETIONS, completion_id, data, "Repair completion")
    return jsonify(doc), 200


@completions_bp.route('/<completion_id>', methods=['DELETE'])
@requires_document_store
def delete_completion(completion_id):
    get_repository().delete(REPAIR_COMPLETIONS, completion_id)
    return jsonify({"message": "Repair completion deleted"}), 200


@completions_bp.route('/', methods=['DELETE'])
@requires_document_store
def delete_all_completions():
    repo = get_repository()
    ids = repo.list_ids(REPAIR_COMPLETIONS)
    if not ids:
        return jsonify({"message": "Nothing to delete", "deleted": 0}), 200
    deleted = repo.delete_many(REPAIR_COMPLETIONS, ids)
    return jsonify({"message": "Every repair completion was deleted", "deleted": deleted}), 200
