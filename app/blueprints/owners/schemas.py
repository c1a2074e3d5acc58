from marshmallow import fields

from app.blueprints.common import DocumentSchema, required_str


class OwnerSchema(DocumentSchema):
    first_name = required_str()
    last_name = required_str()
    phone = fields.Str(allow_none=True)
    email = fields.Email(allow_none=True)
    vehicle_ids = fields.List(fields.Str(), allow_none=True)
