from sqlalchemy import text
from petclinic import create_app, db
from tests.conftest import TestConfig, auth, register


def test_factory_creates_schema_on_fresh_database(tmp_path):
    app = create_app(
        TestConfig,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'fresh.db'}",
        UPLOAD_FOLDER=str(tmp_path / 'uploads')
    )
    response = register(app.test_client(), 'a@x.com')
    assert response.status_code == 201
    with app.app_context():
        db.engine.dispose()


def test_sqlite_connections_enforce_foreign_keys(app):
    with app.app_context():
        assert db.session.execute(text('PRAGMA foreign_keys')).scalar() == 1


def test_unknown_route_returns_json(client, owner_a):
    response = client.get('/api/pets/abc', headers=auth(owner_a[1]))
    assert response.status_code == 404
    assert 'message' in response.get_json()


def test_wrong_method_returns_json(client, owner_a):
    response = client.patch('/api/pets/1', headers=auth(owner_a[1]))
    assert response.status_code == 405
    assert 'message' in response.get_json()
    assert 'PUT' in response.headers['Allow']
