# Auth service module for registration and login
import logging
import re
import secrets
from functools import lru_cache
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from petclinic import db, bcrypt
from petclinic.errors import ValidationError, Unauthorized, InternalError
from petclinic.models import User, Role
from petclinic.utils.token_service import issue_token
from petclinic.utils.util import text_field

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')
VALID_ROLES = {role.value for role in Role}


def _normalize_email(value):
    return value.strip().lower()


@lru_cache(maxsize=1)
def _decoy_hash():
    # Compared against when the email is unknown so both failure paths cost one bcrypt check
    return bcrypt.generate_password_hash(secrets.token_hex(16)).decode('utf-8')


def format_user(user):
    return {
        'id': user.id,
        'name': user.name,
        'contact': user.contact,
        'email': user.email,
        'role': user.role,
        'created_at': user.created_at.isoformat() if user.created_at else None
    }


def register_user(data):
    email = _normalize_email(text_field(data, 'email'))
    password = data.get('password')
    name = text_field(data, 'name')
    if not email or not isinstance(password, str) or not password or not name:
        raise ValidationError('Email, password, and name are required')
    if not EMAIL_REGEX.match(email):
        raise ValidationError('Invalid email format')

    role = data.get('role')
    if role is None or role == '':
        role = Role.OWNER.value
    if not isinstance(role, str) or role not in VALID_ROLES:
        raise ValidationError("Invalid role. Must be 'owner' or 'staff'")

    if User.query.filter_by(email=email).first():
        raise ValidationError('Email already registered')

    user = User(
        name=name,
        contact=text_field(data, 'contact') or None,
        email=email,
        password=bcrypt.generate_password_hash(password).decode('utf-8'),
        role=role
    )
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning(f"Registration raced on existing email: {email}")
        raise ValidationError('Email already registered')
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database insert failed: {e}")
        raise InternalError('Registration failed')

    logger.info(f"User registered: {email} ({role})")
    return user


def authenticate(data):
    """Check credentials and return ``(user, token)``.

    Unknown email and wrong password fail the same way so the response never
    reveals which accounts exist.
    """
    email = _normalize_email(text_field(data, 'email'))
    password = data.get('password')
    if not email or not isinstance(password, str) or not password:
        raise ValidationError('Email and password are required')

    user = User.query.filter_by(email=email).first()
    stored_hash = user.password if user else _decoy_hash()
    password_ok = bcrypt.check_password_hash(stored_hash, password)
    if user is None or not password_ok:
        logger.warning(f"Login failed for: {email}")
        raise Unauthorized('Invalid credentials')

    token = issue_token(user.id, user.email, user.role)
    logger.info(f"User logged in: {email} ({user.role})")
    return user, token


def list_users():
    return [format_user(u) for u in User.query.order_by(User.id).all()]
