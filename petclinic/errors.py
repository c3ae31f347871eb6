"""Error taxonomy shared by services and routes.

Every error carries the HTTP status it maps to and a client-safe message.
Store and filesystem details are logged where they happen and never placed
in ``message``.
"""
import enum


class ClinicError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ClinicError):
    status_code = 400
    default_message = 'Invalid request'


class Unauthorized(ClinicError):
    status_code = 401
    default_message = 'Unauthorized'


class AuthReason(enum.Enum):
    MISSING = 'missing'
    MALFORMED = 'malformed'
    INVALID_SIGNATURE = 'invalid_signature'
    EXPIRED = 'expired'


class AuthError(Unauthorized):
    """Token could not be verified."""

    _messages = {
        AuthReason.MISSING: 'Missing authorization token',
        AuthReason.MALFORMED: 'Invalid token',
        AuthReason.INVALID_SIGNATURE: 'Invalid token',
        AuthReason.EXPIRED: 'Token has expired',
    }

    def __init__(self, reason):
        self.reason = reason
        super().__init__(self._messages[reason])


class Forbidden(ClinicError):
    status_code = 403
    default_message = 'Access denied'


class NotFound(ClinicError):
    status_code = 404
    default_message = 'Not found'


class PayloadTooLarge(ClinicError):
    status_code = 413
    default_message = 'File too large'


class InternalError(ClinicError):
    status_code = 500
