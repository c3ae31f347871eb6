from flask import Blueprint
from flask.views import MethodView
from petclinic.services import appointment_service
from petclinic.utils.auth_middleware import token_required
from petclinic.utils.util import json_body

bp = Blueprint('appointments', __name__, url_prefix='/api/appointments')


class AppointmentList(MethodView):
    @token_required
    def get(self, identity):
        """Get all appointments (owners see only their pets')"""
        return appointment_service.list_appointments(identity), 200

    @token_required
    def post(self, identity):
        """Create a new appointment"""
        return appointment_service.create_appointment(identity, json_body()), 201


class AppointmentResource(MethodView):
    @token_required
    def get(self, appointment_id, identity):
        """Get appointment by ID"""
        return appointment_service.get_appointment(identity, appointment_id), 200

    @token_required
    def put(self, appointment_id, identity):
        """Update an appointment"""
        appointment_service.update_appointment(identity, appointment_id, json_body())
        return {'message': 'Appointment updated successfully'}, 200

    @token_required
    def delete(self, appointment_id, identity):
        """Delete an appointment"""
        appointment_service.delete_appointment(identity, appointment_id)
        return {'message': 'Appointment deleted successfully'}, 200


bp.add_url_rule('', view_func=AppointmentList.as_view('appointment_list'))
bp.add_url_rule('/<int:appointment_id>', view_func=AppointmentResource.as_view('appointment'))
