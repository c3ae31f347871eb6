import pytest
from petclinic import create_app, db
from petclinic.config import Config


class TestConfig(Config):
    __test__ = False
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    JWT_SECRET_KEY = 'test-secret'
    BCRYPT_LOG_ROUNDS = 4
    MAX_UPLOAD_SIZE = 1024 * 1024


@pytest.fixture
def upload_dir(tmp_path):
    return str(tmp_path / 'uploads')


@pytest.fixture
def app(upload_dir):
    app = create_app(TestConfig, UPLOAD_FOLDER=upload_dir)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth(token):
    return {'Authorization': f'Bearer {token}'}


def register(client, email, password='pw', name='Test User', **extra):
    payload = {'email': email, 'password': password, 'name': name}
    payload.update(extra)
    return client.post('/api/register', json=payload)


def login(client, email, password='pw'):
    response = client.post('/api/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return response.get_json()


def signup(client, email, role='owner'):
    user_id = register(client, email, role=role).get_json()['user_id']
    return user_id, login(client, email)['token']


@pytest.fixture
def owner_a(client):
    """(user_id, token) for owner a@x.com"""
    return signup(client, 'a@x.com')


@pytest.fixture
def owner_b(client):
    return signup(client, 'b@x.com')


@pytest.fixture
def staff(client):
    return signup(client, 'vet@clinic.com', role='staff')


@pytest.fixture
def make_pet(client):
    def _make_pet(token, **fields):
        payload = {'name': 'Rex', 'species': 'dog'}
        payload.update(fields)
        response = client.post('/api/pets', json=payload, headers=auth(token))
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _make_pet
