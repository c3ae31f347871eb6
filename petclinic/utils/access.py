"""Ownership rules for pets and everything that hangs off a pet.

Staff may touch any row. Every other role is limited to rows whose resolved
owner is the caller. Appointments and medical records have no owner column of
their own, so their owner is the ``owner_id`` of the pet they belong to.
"""
import logging
from petclinic import db
from petclinic.errors import Forbidden, NotFound, ValidationError
from petclinic.models import Pet, Role
from petclinic.utils.util import parse_id

logger = logging.getLogger(__name__)


def can_access(caller_id, caller_role, resource_owner_id):
    if caller_role == Role.STAFF.value:
        return True
    return caller_id == resource_owner_id


def authorize(identity, resource_owner_id):
    if not can_access(identity.user_id, identity.role, resource_owner_id):
        logger.warning(f"Access denied for user {identity.user_id} on resource owned by {resource_owner_id}")
        raise Forbidden('Access denied')


def pet_owner_id(pet_id):
    owner_id = db.session.query(Pet.owner_id).filter(Pet.id == pet_id).scalar()
    if owner_id is None:
        raise NotFound('Pet not found')
    return owner_id


def authorize_pet(identity, pet_id):
    owner_id = pet_owner_id(pet_id)
    authorize(identity, owner_id)
    return owner_id


def owner_for_new_pet(identity, requested_owner_id):
    """Owners always create pets for themselves; staff must name the owner."""
    if not identity.is_staff:
        return identity.user_id
    owner_id = parse_id(requested_owner_id)
    if owner_id is None:
        raise ValidationError('Owner ID is required')
    return owner_id


def scope_to_caller(query, identity, owner_column):
    """Restrict ``query`` to rows owned by the caller unless the caller is staff.

    ``owner_column`` must already be reachable from ``query`` (joined in for
    resources owned through a pet).
    """
    if identity.is_staff:
        return query
    return query.filter(owner_column == identity.user_id)
