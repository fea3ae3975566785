from marshmallow import EXCLUDE
from portal.extensions import ma
from portal.schemas.validators import not_blank


class MessageInputSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    sender = ma.String(required=True, validate=not_blank)
    text = ma.String(required=True, validate=not_blank)
