import logging
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from petclinic.config import Config
from petclinic.errors import ClinicError, PayloadTooLarge, InternalError

logger = logging.getLogger(__name__)

migrate = Migrate()
db = SQLAlchemy()
bcrypt = Bcrypt()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def _register_error_handlers(app):
    @app.errorhandler(ClinicError)
    def handle_clinic_error(error):
        return jsonify({'message': error.message}), error.status_code

    @app.errorhandler(413)
    def handle_too_large(error):
        return jsonify({'message': PayloadTooLarge.default_message}), PayloadTooLarge.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        headers = [(k, v) for k, v in error.get_headers() if k.lower() != 'content-type']
        return jsonify({'message': error.description}), error.code, headers

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        logger.exception(f"Unhandled store error: {error}")
        return jsonify({'message': InternalError.default_message}), InternalError.status_code


def create_app(config_object=Config, **settings):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(settings)
    # Room for the multipart boundary and part headers; the file itself is bounded by MAX_UPLOAD_SIZE
    app.config['MAX_CONTENT_LENGTH'] = app.config['MAX_UPLOAD_SIZE'] + app.config['MULTIPART_OVERHEAD']

    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)

    from petclinic.utils.storage import RecordStorage
    app.extensions['record_storage'] = RecordStorage(app.config['UPLOAD_FOLDER'])

    CORS(app, resources={r"/api/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PUT", "DELETE", "OPTIONS"]))

    # Middleware for request logging
    from petclinic.utils.auth_middleware import setup_request_logging
    setup_request_logging(app)

    _register_error_handlers(app)

    from petclinic.routes import register_routes
    register_routes(app)

    from petclinic.commands import register_commands
    register_commands(app)

    with app.app_context():
        if db.engine.dialect.name == 'sqlite':
            event.listen(db.engine, 'connect', _enable_sqlite_foreign_keys)
        db.create_all()  # Create all tables

    return app
