from marshmallow import Schema, fields, INCLUDE

from app.blueprints.common import DocumentSchema, required_str


class RefSchema(Schema):
    class Meta:
        unknown = INCLUDE

    id = required_str()


class CompletionSchema(DocumentSchema):
    repair = fields.Nested(RefSchema, required=True)
    part = fields.Nested(RefSchema, required=True)
    completed_at = fields.DateTime(required=True)


class CompletionUpdateSchema(DocumentSchema):
    completed_at = fields.DateTime(required=True)
    repair = fields.Nested(RefSchema)
    part = fields.Nested(RefSchema)
