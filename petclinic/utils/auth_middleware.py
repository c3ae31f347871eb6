import logging
from functools import wraps
from flask import request
from petclinic.errors import AuthError, AuthReason
from petclinic.utils.token_service import verify_token

logger = logging.getLogger(__name__)


def _bearer_token():
    auth_header = request.headers.get('Authorization', '')
    if not auth_header:
        raise AuthError(AuthReason.MISSING)
    scheme, _, token = auth_header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        raise AuthError(AuthReason.MALFORMED)
    return token.strip()


def token_required(f):
    """Verify the bearer token and pass the caller's identity as ``identity=``."""
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            identity = verify_token(_bearer_token())
        except AuthError as e:
            logger.warning(f"Rejected token on {request.method} {request.path}: {e.reason.value}")
            raise
        return f(*args, identity=identity, **kwargs)
    return decorated


def setup_request_logging(app):
    @app.before_request
    def log_request():
        logger.info(f"{request.method} {request.path} from {request.remote_addr}")
