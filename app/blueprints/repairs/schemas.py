from marshmallow import Schema, ValidationError, fields, validate, validates, INCLUDE

from app.blueprints.common import DocumentSchema, required_str

PENDING = "PENDING"
IN_PROGRESS = "IN_PROGRESS"
DONE = "DONE"
REPAIR_STATUSES = (PENDING, IN_PROGRESS, DONE)


class VehicleRefSchema(Schema):
    class Meta:
        unknown = INCLUDE

    id = required_str()


class RepairSchema(DocumentSchema):
    vehicle = fields.Nested(VehicleRefSchema, required=True)
    description = required_str()
    status = fields.Str(validate=validate.OneOf(REPAIR_STATUSES))
    client_id = fields.Str(allow_none=True)
    estimated_cost = fields.Float(allow_none=True, validate=validate.Range(min=0))

    @validates("vehicle")
    def validate_vehicle(self, value, **kwargs):
        # partial updates skip required fields inside the nested schema too
        if not value.get("id"):
            raise ValidationError("Vehicle reference needs an id.")
