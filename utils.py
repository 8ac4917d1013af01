import re
from flask import request
from errors import InvalidInput

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def get_json_body():
    """The request's JSON object, or {} when there is no body."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput('Request body must be a JSON object')
    return data


def parse_quantity(quantity):
    """
    Best-effort integer read of a free-text quantity.
    "5 kg" -> 5, "2.5kg" -> 2, "about 5" -> 0, None -> 0.
    """
    if quantity is None:
        return 0
    match = _LEADING_INT.match(str(quantity))
    return int(match.group(1)) if match else 0


def get_str(data, key):
    """data[key] if it is a string, None if absent; anything else is a 400."""
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidInput(f'{key} must be a string')
    return value
