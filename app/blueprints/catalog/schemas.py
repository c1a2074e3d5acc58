from marshmallow import fields, validate

from app.blueprints.common import DocumentSchema, required_str


class PartSchema(DocumentSchema):
    name = required_str()
    part_type_id = fields.Str(allow_none=True)
    price = fields.Float(allow_none=True, validate=validate.Range(min=0))
    repair_minutes = fields.Int(allow_none=True, validate=validate.Range(min=0))


class PartTypeSchema(DocumentSchema):
    name = required_str()
    description = fields.Str(allow_none=True)
