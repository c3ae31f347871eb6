from flask import Blueprint
from flask.views import MethodView
from petclinic.services import pet_service
from petclinic.utils.auth_middleware import token_required
from petclinic.utils.util import json_body

bp = Blueprint('pets', __name__, url_prefix='/api/pets')


class PetList(MethodView):
    @token_required
    def get(self, identity):
        """List pets (owners see only their own)"""
        return pet_service.list_pets(identity), 200

    @token_required
    def post(self, identity):
        """Create a pet"""
        return pet_service.create_pet(identity, json_body()), 201


class PetResource(MethodView):
    @token_required
    def get(self, pet_id, identity):
        """Get a pet by ID"""
        return pet_service.get_pet(identity, pet_id), 200

    @token_required
    def put(self, pet_id, identity):
        """Update a pet"""
        pet_service.update_pet(identity, pet_id, json_body())
        return {'message': 'Pet updated successfully'}, 200

    @token_required
    def delete(self, pet_id, identity):
        """Delete a pet with its appointments and medical records"""
        pet_service.delete_pet(identity, pet_id)
        return {'message': 'Pet deleted successfully'}, 200


bp.add_url_rule('', view_func=PetList.as_view('pet_list'))
bp.add_url_rule('/<int:pet_id>', view_func=PetResource.as_view('pet'))
