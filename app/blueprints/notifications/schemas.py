from marshmallow import fields

from app.blueprints.common import DocumentSchema, required_str


class NotificationSchema(DocumentSchema):
    vehicle_id = required_str()
    message = required_str()
    title = fields.Str(allow_none=True)
    read = fields.Bool(load_default=False)
