import os
import datetime
from dotenv import load_dotenv

load_dotenv()


def _env_int(key, default):
    try:
        return int(os.getenv(key, ''))
    except ValueError:
        return default


def _database_url():
    url = os.getenv('DATABASE_URL')
    if url:
        return url
    # Fallback to individual variables
    user = os.getenv('DB_USER', 'postgres')
    password = os.getenv('DB_PASSWORD', 'postgres')
    host = os.getenv('DB_HOST', 'localhost')
    port = os.getenv('DB_PORT', '5432')
    name = os.getenv('DB_NAME', 'petclinic')
    sslmode = os.getenv('DB_SSLMODE', 'disable')
    return f'postgresql://{user}:{password}@{host}:{port}/{name}?sslmode={sslmode}'


class Config:
    # Server
    SERVER_HOST = os.getenv('SERVER_HOST', '0.0.0.0')
    SERVER_PORT = _env_int('SERVER_PORT', 8080)

    # Database configuration
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT configuration
    JWT_SECRET_KEY = os.getenv('JWT_SECRET') or os.getenv('JWT_SECRET_KEY', 'your-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = datetime.timedelta(hours=24)
    BCRYPT_LOG_ROUNDS = _env_int('BCRYPT_LOG_ROUNDS', 12)

    # Uploads
    UPLOAD_FOLDER = os.path.abspath(os.getenv('UPLOAD_DIR', './uploads'))
    MAX_UPLOAD_SIZE = _env_int('MAX_UPLOAD_SIZE', 10 * 1024 * 1024)
    MULTIPART_OVERHEAD = 64 * 1024

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # CORS configuration
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')
    CORS_SUPPORTS_CREDENTIALS = True
    CORS_ALLOW_HEADERS = ["Content-Type", "Authorization"]
    CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
