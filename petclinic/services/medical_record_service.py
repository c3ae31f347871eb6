"""Medical record files and their metadata rows.

An upload writes the file first and inserts the row second. The filesystem
and the store share no transaction, so when the insert fails the file that was
just written is removed again. That cleanup is tried once; if it fails too the
file is left behind and only a warning is logged.

Deleting a record removes the row first. The row is what makes a record
exist, so the file removal that follows is best effort.
"""
import logging
import os
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from petclinic import db
from petclinic.errors import ValidationError, NotFound, InternalError, PayloadTooLarge
from petclinic.models import MedicalRecord, Pet
from petclinic.utils.access import authorize, authorize_pet
from petclinic.utils.storage import get_storage
from petclinic.utils.util import parse_id

logger = logging.getLogger(__name__)


def format_record(record):
    return {
        'id': record.id,
        'pet_id': record.pet_id,
        'file_name': record.file_name,
        'file_path': record.file_path,
        'file_type': record.file_type,
        'uploaded_at': record.uploaded_at.isoformat() if record.uploaded_at else None
    }


def file_size(file):
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def check_upload_size(size, max_size):
    if size > max_size:
        raise PayloadTooLarge('File too large')


def upload_medical_record(identity, pet_id_value, file):
    pet_id = parse_id(pet_id_value)
    if pet_id is None:
        raise ValidationError('Valid pet_id is required')
    if file is None or not file.filename:
        raise ValidationError('File is required')
    check_upload_size(file_size(file), current_app.config['MAX_UPLOAD_SIZE'])

    authorize_pet(identity, pet_id)

    storage = get_storage()
    try:
        storage.ensure_dir()
    except OSError as e:
        logger.error(f"Failed to create upload directory: {e}")
        raise InternalError('Failed to create upload directory')

    try:
        file_path = storage.save(file, pet_id)
    except OSError as e:
        logger.error(f"Failed to save file: {e}")
        raise InternalError('Failed to save file')

    record = MedicalRecord(
        pet_id=pet_id,
        file_name=file.filename,
        file_path=file_path,
        file_type=file.content_type
    )
    try:
        db.session.add(record)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to save record metadata: {e}")
        if not storage.discard(file_path):
            logger.warning(f"Orphaned upload left on disk: {file_path}")
        raise InternalError('Failed to save record')

    logger.info(f"Medical record uploaded: ID={record.id}, Pet={pet_id}, File={record.file_name}")
    return record


def list_records(identity, pet_id):
    authorize_pet(identity, pet_id)
    records = (
        MedicalRecord.query.filter_by(pet_id=pet_id)
        .order_by(MedicalRecord.uploaded_at.desc(), MedicalRecord.id.desc())
        .all()
    )
    return [format_record(r) for r in records]


def _record_with_owner(record_id):
    row = (
        db.session.query(MedicalRecord, Pet.owner_id)
        .join(Pet, MedicalRecord.pet_id == Pet.id)
        .filter(MedicalRecord.id == record_id)
        .first()
    )
    if row is None:
        raise NotFound('Record not found')
    return row


def record_for_download(identity, record_id):
    record, owner_id = _record_with_owner(record_id)
    authorize(identity, owner_id)
    if not os.path.isfile(record.file_path):
        logger.error(f"File not found on disk: {record.file_path}")
        raise NotFound('File not found')
    logger.info(f"Medical record downloaded: ID={record_id}, User={identity.user_id}")
    return record


def delete_record(identity, record_id):
    record, owner_id = _record_with_owner(record_id)
    authorize(identity, owner_id)
    file_path = record.file_path

    try:
        deleted = MedicalRecord.query.filter_by(id=record_id).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to delete record: {e}")
        raise InternalError('Failed to delete record')
    if deleted == 0:
        raise NotFound('Record not found')

    get_storage().discard(file_path)
    logger.info(f"Medical record deleted: ID={record_id}")


def referenced_paths():
    return [path for (path,) in db.session.query(MedicalRecord.file_path)]
