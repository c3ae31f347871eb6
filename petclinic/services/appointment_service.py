# Appointment service module; ownership of an appointment is the ownership of its pet
import logging
from datetime import timezone
from dateutil.parser import isoparse
from sqlalchemy.exc import SQLAlchemyError
from petclinic import db
from petclinic.errors import ValidationError, NotFound, InternalError
from petclinic.models import Appointment, Pet
from petclinic.utils.access import authorize, authorize_pet, scope_to_caller
from petclinic.utils.util import parse_id, text_field

logger = logging.getLogger(__name__)


def format_appointment(appointment):
    return {
        'id': appointment.id,
        'pet_id': appointment.pet_id,
        'date': appointment.date.isoformat(),
        'reason': appointment.reason,
        'status': appointment.status,
        'created_at': appointment.created_at.isoformat() if appointment.created_at else None
    }


def parse_date(value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError('Invalid date format. Use ISO 8601 (YYYY-MM-DDTHH:MM:SS)')
    try:
        parsed = isoparse(value.strip())
    except (ValueError, OverflowError):
        raise ValidationError('Invalid date format. Use ISO 8601 (YYYY-MM-DDTHH:MM:SS)')
    # Stored as naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _owned_query():
    return Appointment.query.join(Pet, Appointment.pet_id == Pet.id)


def appointment_owner_id(appointment_id):
    owner_id = (
        db.session.query(Pet.owner_id)
        .join(Appointment, Appointment.pet_id == Pet.id)
        .filter(Appointment.id == appointment_id)
        .scalar()
    )
    if owner_id is None:
        raise NotFound('Appointment not found')
    return owner_id


def list_appointments(identity):
    query = scope_to_caller(_owned_query(), identity, Pet.owner_id)
    return [format_appointment(a) for a in query.order_by(Appointment.date.desc(), Appointment.id.desc()).all()]


def get_appointment(identity, appointment_id):
    row = (
        db.session.query(Appointment, Pet.owner_id)
        .join(Pet, Appointment.pet_id == Pet.id)
        .filter(Appointment.id == appointment_id)
        .first()
    )
    if row is None:
        raise NotFound('Appointment not found')
    appointment, owner_id = row
    authorize(identity, owner_id)
    return format_appointment(appointment)


def create_appointment(identity, data):
    pet_id = parse_id(data.get('pet_id'))
    if pet_id is None or not data.get('date'):
        raise ValidationError('Pet ID and date are required')
    date = parse_date(data.get('date'))
    status = text_field(data, 'status') or Appointment.DEFAULT_STATUS

    authorize_pet(identity, pet_id)

    appointment = Appointment(
        pet_id=pet_id,
        date=date,
        reason=text_field(data, 'reason') or None,
        status=status
    )
    try:
        db.session.add(appointment)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to create appointment: {e}")
        raise InternalError('Failed to create appointment')

    logger.info(f"Appointment created: ID={appointment.id}, Pet={pet_id}")
    return format_appointment(appointment)


def update_appointment(identity, appointment_id, data):
    changes = {}
    if 'date' in data:
        changes['date'] = parse_date(data['date'])
    if 'reason' in data:
        changes['reason'] = text_field(data, 'reason') or None
    if 'status' in data:
        status = text_field(data, 'status')
        if not status:
            raise ValidationError('status cannot be empty')
        changes['status'] = status
    if not changes:
        raise ValidationError('No fields to update')

    authorize(identity, appointment_owner_id(appointment_id))

    try:
        updated = Appointment.query.filter_by(id=appointment_id).update(changes)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to update appointment: {e}")
        raise InternalError('Failed to update appointment')
    if updated == 0:
        raise NotFound('Appointment not found')

    logger.info(f"Appointment updated: ID={appointment_id}")


def delete_appointment(identity, appointment_id):
    authorize(identity, appointment_owner_id(appointment_id))

    try:
        deleted = Appointment.query.filter_by(id=appointment_id).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to delete appointment: {e}")
        raise InternalError('Failed to delete appointment')
    if deleted == 0:
        raise NotFound('Appointment not found')

    logger.info(f"Appointment deleted: ID={appointment_id}")
