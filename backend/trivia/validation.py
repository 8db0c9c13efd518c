import math
from numbers import Number

from trivia.errors import InvalidField, MissingField


def _is_missing(value):
    return value is None or (isinstance(value, str) and value == '')


def require_fields(data, required_fields):
    """Raise MissingField for the first absent or empty field, in the order given."""
    for field in required_fields:
        if _is_missing((data or {}).get(field)):
            raise MissingField(f'Missing required field: {field}')


def parse_time_spent(value):
    # bool is a Number subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, Number):
        raise InvalidField('timeSpent must be a number')
    try:
        value = float(value)
    except OverflowError:
        raise InvalidField('timeSpent is out of range')
    if not math.isfinite(value) or value < 0:
        raise InvalidField('timeSpent must be a finite non-negative number')
    return value


def check_max_length(data, field, max_length):
    value = (data or {}).get(field)
    if isinstance(value, str) and len(value) > max_length:
        raise InvalidField(f'{field} must be at most {max_length} characters')
    return value


def parse_optional_answer(value):
    if value is not None and not isinstance(value, str):
        raise InvalidField('answer must be a string')
    return value


def parse_boolean(data, field):
    value = (data or {}).get(field)
    if not isinstance(value, bool):
        raise InvalidField(f'{field} must be a boolean')
    return value


def parse_choice(data, field, choices):
    value = (data or {}).get(field)
    if value not in choices:
        allowed = ' or '.join(f'"{c}"' for c in choices)
        raise InvalidField(f'{field} must be {allowed}')
    return value
