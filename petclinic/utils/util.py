from functools import wraps
from flask import request
from petclinic.errors import Forbidden, ValidationError


def role_required(*roles):
    """Allow only the given roles. Must sit below ``token_required``."""
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            identity = kwargs['identity']
            if identity.role not in [role.value for role in roles]:
                raise Forbidden('Access denied')
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Invalid request')
    return data


def text_field(data, key):
    value = data.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(f'{key} must be a string')
    return value.strip()


def parse_id(value):
    """Positive integer id from JSON or form input, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            return None
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        return None
    return value
