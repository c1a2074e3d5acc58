"""Parts, part types and vehicle types: the shop's reference catalogs."""
from flask import Blueprint, jsonify

from app.store.base import PART_TYPES, PARTS, VEHICLE_TYPES
from ..common import (
    create_sequential,
    delete_or_404,
    get_or_404,
    get_repository,
    load_body,
    load_update,
    update_or_404,
)
from .schemas import PartSchema, PartTypeSchema

parts_bp = Blueprint('parts', __name__)
part_types_bp = Blueprint('part_types', __name__)
vehicle_types_bp = Blueprint('vehicle_types', __name__)

part_schema = PartSchema()
part_type_schema = PartTypeSchema()

PART_ID_PREFIX = "PRT"
PART_TYPE_ID_PREFIX = "PTY"


# --- parts ---
@parts_bp.route('/', methods=['GET'])
def list_parts():
    return jsonify(get_repository().list(PARTS)), 200


@parts_bp.route('/<part_id>', methods=['GET'])
def get_part(part_id):
    return jsonify(get_or_404(PARTS, part_id, "Part")), 200


@parts_bp.route('/', methods=['POST'])
def create_part():
    data = load_body(part_schema)
    return jsonify(create_sequential(PARTS, PART_ID_PREFIX, data)), 201


@parts_bp.route('/<part_id>', methods=['PUT'])
def update_part(part_id):
    data = load_update(part_schema)
    return jsonify(update_or_404(PARTS, part_id, data, "Part")), 200


@parts_bp.route('/<part_id>', methods=['DELETE'])
def delete_part(part_id):
    delete_or_404(PARTS, part_id, "Part")
    return jsonify({"message": "Part deleted"}), 200


# --- part types ---
@part_types_bp.route('/', methods=['GET'])
def list_part_types():
    return jsonify(get_repository().list(PART_TYPES)), 200


@part_types_bp.route('/<type_id>', methods=['GET'])
def get_part_type(type_id):
    return jsonify(get_or_404(PART_TYPES, type_id, "Part type")), 200


@part_types_bp.route('/', methods=['POST'])
def create_part_type():
    data = load_body(part_type_schema)
    return jsonify(create_sequential(PART_TYPES, PART_TYPE_ID_PREFIX, data)), 201


@part_types_bp.route('/<type_id>', methods=['PUT'])
def update_part_type(type_id):
    data = load_update(part_type_schema)
    return jsonify(update_or_404(PART_TYPES, type_id, data, "Part type")), 200


@part_types_bp.route('/<type_id>', methods=['DELETE'])
def delete_part_type(type_id):
    delete_or_404(PART_TYPES, type_id, "Part type")
    return jsonify({"message": "Part type deleted"}), 200


# --- vehicle types (read-only) ---
@vehicle_types_bp.route('/', methods=['GET'])
def list_vehicle_types():
    return jsonify(get_repository().list(VEHICLE_TYPES)), 200


@vehicle_types_bp.route('/<type_id>', methods=['GET'])
def get_vehicle_type(type_id):
    return jsonify(get_or_404(VEHICLE_TYPES, type_id, "Vehicle type")), 200
