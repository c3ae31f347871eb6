"""Issue and verify the signed identity tokens carried as bearer tokens.

Tokens are HS256 JWTs signed with the process-wide ``JWT_SECRET_KEY``. They
carry the user id, email and role next to the standard ``iat``/``exp`` claims
and expire ``JWT_ACCESS_TOKEN_EXPIRES`` (24 hours) after issue. There is no
revocation list: a token stays valid until it expires.
"""
import datetime
from dataclasses import dataclass
import jwt
from flask import current_app
from petclinic.errors import AuthError, AuthReason
from petclinic.models.user_model import Role

ALGORITHM = 'HS256'


@dataclass(frozen=True)
class Identity:
    """Verified caller identity threaded through every protected handler."""
    user_id: int
    email: str
    role: str

    @property
    def is_staff(self):
        return self.role == Role.STAFF.value

    def to_dict(self):
        return {'user_id': self.user_id, 'email': self.email, 'role': self.role}


def issue_token(user_id, email, role, expires_delta=None):
    if expires_delta is None:
        expires_delta = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    now = datetime.datetime.now(datetime.timezone.utc)
    payload = {
        'sub': str(user_id),
        'user_id': user_id,
        'email': email,
        'role': role,
        'iat': now,
        'exp': now + expires_delta
    }
    return jwt.encode(payload, current_app.config['JWT_SECRET_KEY'], algorithm=ALGORITHM)


def verify_token(token):
    """Return the :class:`Identity` encoded in ``token`` or raise :class:`AuthError`."""
    try:
        claims = jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=[ALGORITHM],
            options={'require': ['exp', 'iat']}
        )
    except jwt.ExpiredSignatureError:
        raise AuthError(AuthReason.EXPIRED)
    except jwt.InvalidSignatureError:
        raise AuthError(AuthReason.INVALID_SIGNATURE)
    except jwt.InvalidTokenError:
        raise AuthError(AuthReason.MALFORMED)

    user_id = claims.get('user_id')
    role = claims.get('role')
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(role, str):
        raise AuthError(AuthReason.MALFORMED)
    return Identity(user_id=user_id, email=claims.get('email', ''), role=role)
