from marshmallow import fields, validate

from app.blueprints.common import DocumentSchema, required_str

PAYMENT_METHODS = ("cash", "card", "transfer", "check")


class PaymentSchema(DocumentSchema):
    repair_id = required_str()
    client_id = required_str()
    amount = fields.Float(required=True, validate=validate.Range(min=0, min_inclusive=False))
    method = fields.Str(validate=validate.OneOf(PAYMENT_METHODS))
    paid_at = fields.DateTime()
