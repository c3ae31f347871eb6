from flask import Blueprint
from flask.views import MethodView
from petclinic.services.auth_service import register_user, authenticate, list_users
from petclinic.models import Role
from petclinic.utils.auth_middleware import token_required
from petclinic.utils.util import json_body, role_required

bp = Blueprint('auth', __name__, url_prefix='/api')


class Register(MethodView):
    def post(self):
        """Register a new owner or staff member"""
        user = register_user(json_body())
        return {
            'message': 'User registered successfully',
            'user_id': user.id,
            'role': user.role
        }, 201


class Login(MethodView):
    def post(self):
        """Log in and receive a bearer token"""
        user, token = authenticate(json_body())
        return {
            'token': token,
            'role': user.role,
            'name': user.name,
            'user_id': user.id
        }, 200


class VerifyToken(MethodView):
    @token_required
    def get(self, identity):
        """Return the identity carried by the caller's token"""
        return identity.to_dict(), 200


class OwnerList(MethodView):
    @token_required
    @role_required(Role.STAFF)
    def get(self, identity):
        """List registered users (staff only)"""
        return list_users(), 200


bp.add_url_rule('/register', view_func=Register.as_view('register'))
bp.add_url_rule('/login', view_func=Login.as_view('login'))
bp.add_url_rule('/verify', view_func=VerifyToken.as_view('verify'))
bp.add_url_rule('/owners', view_func=OwnerList.as_view('owners'))
