from flask import Blueprint, current_app, jsonify

from app.store.base import REPAIRS
from ..common import (
    create_sequential,
    delete_or_404,
    get_or_404,
    get_repository,
    load_body,
    load_update,
    update_or_404,
)
from .schemas import IN_PROGRESS, PENDING, RepairSchema

repairs_bp = Blueprint('repairs', __name__)
repair_schema = RepairSchema()

REPAIR_ID_PREFIX = "REP"


@repairs_bp.route('/', methods=['GET'])
def list_repairs():
    return jsonify(get_repository().list(REPAIRS)), 200


@repairs_bp.route('/vehicle/<vehicle_id>', methods=['GET'])
def list_repairs_by_vehicle(vehicle_id):
    return jsonify(get_repository().filter_by(REPAIRS, "vehicle.id", vehicle_id)), 200


@repairs_bp.route('/<repair_id>', methods=['GET'])
def get_repair(repair_id):
    return jsonify(get_or_404(REPAIRS, repair_id, "Repair")), 200


@repairs_bp.route('/', methods=['POST'])
def create_repair():
    data = load_body(repair_schema)
    data.setdefault("status", PENDING)
    r = create_sequential(REPAIRS, REPAIR_ID_PREFIX, data)
    current_app.logger.info("Repair %s created for vehicle %s", r["id"], data["vehicle"]["id"])
    return jsonify(r), 201


@repairs_bp.route('/<repair_id>', methods=['PUT'])
def update_repair(repair_id):
    data = load_update(repair_schema)
    return jsonify(update_or_404(REPAIRS, repair_id, data, "Repair")), 200


@repairs_bp.route('/<repair_id>', methods=['DELETE'])
def delete_repair(repair_id):
    delete_or_404(REPAIRS, repair_id, "Repair")
    return jsonify({"message": "Repair deleted"}), 200


# GET alias so the transition can be triggered from a browser
@repairs_bp.route('/status/in-progress', methods=['PUT', 'GET'])
def set_all_in_progress():
    repo = get_repository()
    modified = repo.update_all(REPAIRS, {"status": IN_PROGRESS})
    current_app.logger.info("Set %d repairs to %s (%s)", modified, IN_PROGRESS, repo.mode)
    return jsonify({
        "message": f"Status set to {IN_PROGRESS} for every repair",
        "mode": repo.mode,
        "modified": modified,
    }), 200
