from flask import Blueprint, jsonify

from app.store.base import VEHICLES
from ..common import (
    delete_or_404,
    get_or_404,
    get_repository,
    load_body,
    load_update,
    now,
    update_or_404,
)
from .schemas import VehicleSchema

vehicles_bp = Blueprint('vehicles', __name__)
vehicle_schema = VehicleSchema()


@vehicles_bp.route('/', methods=['GET'])
def list_vehicles():
    return jsonify(get_repository().list(VEHICLES)), 200


@vehicles_bp.route('/<vehicle_id>', methods=['GET'])
def get_vehicle(vehicle_id):
    return jsonify(get_or_404(VEHICLES, vehicle_id, "Vehicle")), 200


@vehicles_bp.route('/client/<client_id>', methods=['GET'])
def list_vehicles_by_client(client_id):
    return jsonify(get_repository().filter_by(VEHICLES, "client_id", client_id)), 200


@vehicles_bp.route('/', methods=['POST'])
def create_vehicle():
    data = load_body(vehicle_schema)
    v = get_repository().add(VEHICLES, {**data, "created_at": now()})
    return jsonify(v), 201


@vehicles_bp.route('/<vehicle_id>', methods=['PUT'])
def update_vehicle(vehicle_id):
    data = load_update(vehicle_schema)
    return jsonify(update_or_404(VEHICLES, vehicle_id, data, "Vehicle")), 200


@vehicles_bp.route('/<vehicle_id>', methods=['DELETE'])
def delete_vehicle(vehicle_id):
    delete_or_404(VEHICLES, vehicle_id, "Vehicle")
    return jsonify({"message": "Vehicle deleted"}), 200
