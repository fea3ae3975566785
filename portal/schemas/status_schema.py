from marshmallow import EXCLUDE, ValidationError, post_load
from portal.extensions import ma
from portal.models.enums import ProjectStatus
from portal.schemas.validators import not_blank


class StatusChangeSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    status = ma.Raw(required=True)
    # None leaves the stored comment untouched
    comment = ma.String(load_default=None, allow_none=True)

    @post_load
    def decode_status(self, data, **kwargs):
        try:
            data["status"] = ProjectStatus.decode(data["status"])
        except ValueError as e:
            raise ValidationError(str(e), field_name="status")
        return data


class DeliveryLinkSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    link = ma.String(required=True, validate=not_blank)
    description = ma.String(required=True, validate=not_blank)
