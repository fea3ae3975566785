from marshmallow import ValidationError

def not_blank(value):
    if value is None or not str(value).strip():
        raise ValidationError("Field may not be blank.")
