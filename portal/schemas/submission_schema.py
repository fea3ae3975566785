from marshmallow import EXCLUDE, post_load
from portal.extensions import ma
from portal.models.enums import BudgetRange
from portal.schemas.validators import not_blank


class SubmissionInputSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    client_name = ma.String(required=True, data_key="clientName", validate=not_blank)
    company_name = ma.String(load_default="", data_key="companyName")
    email = ma.String(required=True, validate=not_blank)
    project_description = ma.String(required=True, data_key="projectDescription", validate=not_blank)
    timeline = ma.String(load_default="")
    budget = ma.Enum(BudgetRange, by_value=True, required=True)

    @post_load
    def strip_text(self, data, **kwargs):
        for key in ("client_name", "company_name", "email", "project_description", "timeline"):
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        return data


class AuthenticatedSubmissionInputSchema(SubmissionInputSchema):
    # opaque blob references
    files = ma.List(ma.String(validate=not_blank), load_default=list)
