# Pet service module for business logic
import logging
from sqlalchemy.exc import SQLAlchemyError
from petclinic import db
from petclinic.errors import ValidationError, NotFound, InternalError
from petclinic.models import Pet, User, MedicalRecord
from petclinic.utils.access import authorize, authorize_pet, owner_for_new_pet, scope_to_caller
from petclinic.utils.storage import get_storage
from petclinic.utils.util import text_field

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'species', 'breed', 'medical_history')
REQUIRED_FIELDS = ('name', 'species')


def format_pet(pet):
    return {
        'id': pet.id,
        'name': pet.name,
        'species': pet.species,
        'breed': pet.breed,
        'owner_id': pet.owner_id,
        'medical_history': pet.medical_history,
        'created_at': pet.created_at.isoformat() if pet.created_at else None
    }


def list_pets(identity):
    query = scope_to_caller(Pet.query, identity, Pet.owner_id)
    return [format_pet(p) for p in query.order_by(Pet.id).all()]


def get_pet(identity, pet_id):
    pet = db.session.get(Pet, pet_id)
    if pet is None:
        raise NotFound('Pet not found')
    authorize(identity, pet.owner_id)
    return format_pet(pet)


def create_pet(identity, data):
    name = text_field(data, 'name')
    species = text_field(data, 'species')
    if not name or not species:
        raise ValidationError('Name and species are required')
    owner_id = owner_for_new_pet(identity, data.get('owner_id'))

    if identity.is_staff and db.session.get(User, owner_id) is None:
        raise NotFound('Owner not found')

    pet = Pet(
        name=name,
        species=species,
        breed=text_field(data, 'breed') or None,
        owner_id=owner_id,
        medical_history=text_field(data, 'medical_history') or None
    )
    try:
        db.session.add(pet)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to create pet: {e}")
        raise InternalError('Failed to create pet')

    logger.info(f"Pet created: ID={pet.id}, Name={pet.name}, Owner={pet.owner_id}")
    return format_pet(pet)


def update_pet(identity, pet_id, data):
    changes = {}
    for field in UPDATABLE_FIELDS:
        if field in data:
            changes[field] = text_field(data, field) or None
    for field in REQUIRED_FIELDS:
        if field in changes and not changes[field]:
            raise ValidationError(f'{field} cannot be empty')
    if not changes:
        raise ValidationError('No fields to update')

    authorize_pet(identity, pet_id)

    try:
        updated = Pet.query.filter_by(id=pet_id).update(changes)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to update pet: {e}")
        raise InternalError('Failed to update pet')
    if updated == 0:
        raise NotFound('Pet not found')

    logger.info(f"Pet updated: ID={pet_id}")


def delete_pet(identity, pet_id):
    authorize_pet(identity, pet_id)

    # Collected before the delete; the cascade removes the rows but not the files
    file_paths = [path for (path,) in db.session.query(MedicalRecord.file_path).filter_by(pet_id=pet_id)]
    try:
        deleted = Pet.query.filter_by(id=pet_id).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to delete pet: {e}")
        raise InternalError('Failed to delete pet')
    if deleted == 0:
        raise NotFound('Pet not found')

    storage = get_storage()
    for path in file_paths:
        storage.discard(path)
    logger.info(f"Pet deleted: ID={pet_id}, record files removed={len(file_paths)}")
