from marshmallow import fields

from app.blueprints.common import DocumentSchema, required_str


class SlotAssignSchema(DocumentSchema):
    repair_id = required_str()
    start_time = fields.DateTime()


class SlotCreateSchema(DocumentSchema):
    repair_id = required_str()
    start_time = fields.DateTime(required=True)
