from flask import abort, request
from marshmallow import ValidationError


def get_json_body():
    """Parsed JSON body, ``{}`` when the body is empty, 400 when it is not JSON."""
    data = request.get_json(silent=True)
    if data is None:
        if request.get_data():
            abort(400, description='Request body must be valid JSON')
        return {}
    return data


def bounded_int_arg(name, default, upper):
    """Integer query argument in ``0..upper``; out-of-range values are a 400."""
    value = request.args.get(name, default, type=int)
    if not 0 <= value <= upper:
        raise ValidationError({name: [f'Must be between 0 and {upper}.']})
    return value
