"""
Routes for the two slot pools. Both share one shape and differ in what a
plain POST does: on the repair pool it adds a free-standing slot document,
on the waiting pool it claims the first free position.
"""
from flask import Blueprint, jsonify

from ..common import get_slot_manager, load_body
from .schemas import SlotAssignSchema, SlotCreateSchema

assign_schema = SlotAssignSchema()
create_schema = SlotCreateSchema()


def make_slot_blueprint(name: str, pool: str, post_claims: bool) -> Blueprint:
    bp = Blueprint(name, __name__)

    @bp.route('/', methods=['GET'])
    def list_slots():
        return jsonify(get_slot_manager(pool).list()), 200

    @bp.route('/reset', methods=['GET'])
    def reset_slots():
        manager = get_slot_manager(pool)
        deleted = manager.reset()
        return jsonify({
            "success": True,
            "mode": manager.repository.mode,
            "deleted": deleted,
            "message": f"{name} emptied",
        }), 200

    @bp.route('/<slot_id>', methods=['GET'])
    def get_slot(slot_id):
        return jsonify(get_slot_manager(pool).get(slot_id)), 200

    @bp.route('/', methods=['POST'])
    def create_slot():
        data = load_body(create_schema)
        manager = get_slot_manager(pool)
        if post_claims:
            a = manager.assign(data["repair_id"], start_time=data["start_time"])
            return jsonify({**a.to_dict(), "id": str(a.slot_id),
                            "message": f"Slot created on position {a.slot_id}"}), 201
        slot = manager.create(data["repair_id"], data["start_time"])
        return jsonify({"id": slot["id"], "message": "Slot created"}), 201

    @bp.route('/assign', methods=['POST'])
    def assign_slot():
        data = load_body(assign_schema)
        a = get_slot_manager(pool).assign(data["repair_id"], start_time=data.get("start_time"))
        return jsonify({**a.to_dict(), "message": "Slot assigned"}), 200

    @bp.route('/<slot_id>', methods=['DELETE'])
    def delete_slot(slot_id):
        get_slot_manager(pool).release(slot_id)
        return jsonify({"message": "Slot deleted"}), 200

    return bp


repair_slots_bp = make_slot_blueprint('slotReparation', 'repair', post_claims=False)
waiting_slots_bp = make_slot_blueprint('slotAttente', 'waiting', post_claims=True)
