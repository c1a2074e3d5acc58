from flask import Blueprint, jsonify

from app.store.base import OWNERS
from ..common import (
    delete_or_404,
    get_or_404,
    get_repository,
    load_body,
    load_update,
    now,
    update_or_404,
)
from .schemas import OwnerSchema

owners_bp = Blueprint('owners', __name__)
owner_schema = OwnerSchema()


@owners_bp.route('/', methods=['GET'])
def list_owners():
    return jsonify(get_repository().list(OWNERS)), 200


@owners_bp.route('/<owner_id>', methods=['GET'])
def get_owner(owner_id):
    return jsonify(get_or_404(OWNERS, owner_id, "Owner")), 200


@owners_bp.route('/', methods=['POST'])
def create_owner():
    data = load_body(owner_schema)
    o = get_repository().add(OWNERS, {**data, "created_at": now()})
    return jsonify(o), 201


@owners_bp.route('/<owner_id>', methods=['PUT'])
def update_owner(owner_id):
    data = load_update(owner_schema)
    return jsonify(update_or_404(OWNERS, owner_id, data, "Owner")), 200


@owners_bp.route('/<owner_id>', methods=['DELETE'])
def delete_owner(owner_id):
    delete_or_404(OWNERS, owner_id, "Owner")
    return jsonify({"message": "Owner deleted"}), 200
