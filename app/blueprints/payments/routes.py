from flask import Blueprint, current_app, jsonify

from app.store.base import PAYMENTS
from ..common import delete_or_404, get_or_404, get_repository, load_body, now
from .schemas import PaymentSchema

payments_bp = Blueprint('payments', __name__)
payment_schema = PaymentSchema()


@payments_bp.route('/', methods=['GET'])
def list_payments():
    return jsonify(get_repository().list(PAYMENTS)), 200


@payments_bp.route('/client/<client_id>', methods=['GET'])
def list_payments_by_client(client_id):
    return jsonify(get_repository().filter_by(PAYMENTS, "client_id", client_id)), 200


@payments_bp.route('/repair/<repair_id>', methods=['GET'])
def list_payments_by_repair(repair_id):
    return jsonify(get_repository().filter_by(PAYMENTS, "repair_id", repair_id)), 200


@payments_bp.route('/<payment_id>', methods=['GET'])
def get_payment(payment_id):
    return jsonify(get_or_404(PAYMENTS, payment_id, "Payment")), 200


@payments_bp.route('/', methods=['POST'])
def create_payment():
    data = load_body(payment_schema)
    stamp = now()
    data.setdefault("paid_at", stamp)
    p = get_repository().add(PAYMENTS, {**data, "created_at": stamp})
    current_app.logger.info("Payment %s recorded for repair %s", p["id"], data["repair_id"])
    return jsonify(p), 201


@payments_bp.route('/<payment_id>', methods=['DELETE'])
def delete_payment(payment_id):
    delete_or_404(PAYMENTS, payment_id, "Payment")
    return jsonify({"message": "Payment deleted"}), 200
