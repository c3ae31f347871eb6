from flask import Blueprint, request, send_file
from flask.views import MethodView
from petclinic.services import medical_record_service
from petclinic.utils.auth_middleware import token_required

bp = Blueprint('medical_records', __name__, url_prefix='/api/medical-records')


class MedicalRecordUpload(MethodView):
    @token_required
    def post(self, identity):
        """Upload a medical record file for a pet (multipart: pet_id, file)"""
        record = medical_record_service.upload_medical_record(
            identity,
            request.form.get('pet_id'),
            request.files.get('file')
        )
        return {
            'message': 'File uploaded successfully',
            'id': record.id,
            'file_name': record.file_name
        }, 201


class PetMedicalRecords(MethodView):
    @token_required
    def get(self, pet_id, identity):
        """List a pet's medical records, newest first"""
        return medical_record_service.list_records(identity, pet_id), 200


class MedicalRecordDownload(MethodView):
    @token_required
    def get(self, record_id, identity):
        """Download a medical record file"""
        record = medical_record_service.record_for_download(identity, record_id)
        return send_file(
            record.file_path,
            mimetype='application/octet-stream',
            as_attachment=True,
            download_name=record.file_name
        )


class MedicalRecordResource(MethodView):
    @token_required
    def delete(self, record_id, identity):
        """Delete a medical record and its file"""
        medical_record_service.delete_record(identity, record_id)
        return {'message': 'Medical record deleted successfully'}, 200


bp.add_url_rule('', view_func=MedicalRecordUpload.as_view('upload'))
bp.add_url_rule('/pet/<int:pet_id>', view_func=PetMedicalRecords.as_view('pet_records'))
bp.add_url_rule('/<int:record_id>/download', view_func=MedicalRecordDownload.as_view('download'))
bp.add_url_rule('/<int:record_id>', view_func=MedicalRecordResource.as_view('record'))
