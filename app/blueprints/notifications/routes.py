from flask import Blueprint, jsonify

from app.store.base import NOTIFICATIONS
from ..common import delete_or_404, get_or_404, get_repository, load_body, now, update_or_404
from .schemas import NotificationSchema

notifications_bp = Blueprint('notifications', __name__)
notification_schema = NotificationSchema()


@notifications_bp.route('/', methods=['GET'])
def list_notifications():
    return jsonify(get_repository().list(NOTIFICATIONS)), 200


@notifications_bp.route('/unread', methods=['GET'])
def list_unread_notifications():
    # strict equality: a notification without a "read" field is not listed
    return jsonify(get_repository().filter_by(NOTIFICATIONS, "read", False)), 200


@notifications_bp.route('/vehicle/<vehicle_id>', methods=['GET'])
def list_notifications_by_vehicle(vehicle_id):
    return jsonify(get_repository().filter_by(NOTIFICATIONS, "vehicle_id", vehicle_id)), 200


@notifications_bp.route('/<notification_id>', methods=['GET'])
def get_notification(notification_id):
    return jsonify(get_or_404(NOTIFICATIONS, notification_id, "Notification")), 200


@notifications_bp.route('/', methods=['POST'])
def create_notification():
    data = load_body(notification_schema)
    n = get_repository().add(NOTIFICATIONS, {**data, "created_at": now()})
    return jsonify(n), 201


@notifications_bp.route('/<notification_id>/read', methods=['PUT'])
def mark_notification_read(notification_id):
    return jsonify(update_or_404(NOTIFICATIONS, notification_id, {"read": True}, "Notification")), 200


@notifications_bp.route('/<notification_id>', methods=['DELETE'])
def delete_notification(notification_id):
    delete_or_404(NOTIFICATIONS, notification_id, "Notification")
    return jsonify({"message": "Notification deleted"}), 200
