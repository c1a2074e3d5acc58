from marshmallow import fields

from app.blueprints.common import DocumentSchema, required_str


class VehicleSchema(DocumentSchema):
    make = required_str()
    model = required_str()
    year = fields.Int(allow_none=True)
    license_plate = fields.Str(allow_none=True)
    vin = fields.Str(allow_none=True)
    client_id = fields.Str(allow_none=True)
    owner_id = fields.Str(allow_none=True)
