# petclinic/routes/__init__.py
from .auth_routes import bp as auth_bp
from .health_routes import bp as health_bp
from .pet_routes import bp as pet_bp
from .appointment_routes import bp as appointment_bp
from .medical_record_routes import bp as medical_record_bp


def register_routes(app):
    app.register_blueprint(auth_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(pet_bp)
    app.register_blueprint(appointment_bp)
    app.register_blueprint(medical_record_bp)
