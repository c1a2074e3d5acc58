from flask import Blueprint, jsonify

from app.store.base import CLIENTS
from ..common import (
    delete_or_404,
    get_or_404,
    get_repository,
    load_body,
    load_update,
    now,
    update_or_404,
)
from .schemas import ClientSchema

clients_bp = Blueprint('clients', __name__)
client_schema = ClientSchema()


@clients_bp.route('/', methods=['GET'])
def list_clients():
    return jsonify(get_repository().list(CLIENTS)), 200


@clients_bp.route('/<client_id>', methods=['GET'])
def get_client(client_id):
    return jsonify(get_or_404(CLIENTS, client_id, "Client")), 200


@clients_bp.route('/', methods=['POST'])
def create_client():
    data = load_body(client_schema)
    c = get_repository().add(CLIENTS, {**data, "created_at": now()})
    return jsonify(c), 201


@clients_bp.route('/<client_id>', methods=['PUT'])
def update_client(client_id):
    data = load_update(client_schema)
    return jsonify(update_or_404(CLIENTS, client_id, data, "Client")), 200


@clients_bp.route('/<client_id>', methods=['DELETE'])
def delete_client(client_id):
    delete_or_404(CLIENTS, client_id, "Client")
    return jsonify({"message": "Client deleted"}), 200
