import pytest
from flask.testing import FlaskClient

from app import app as flask_app
from mongo import *
from tests import utils


@pytest.fixture
def app(tmp_path):
    utils.drop_db()
    app = flask_app()
    app.config['TESTING'] = True
    app.config['UPLOAD_TMP_DIR'] = str(tmp_path / 'upload')
    app.config['PROBLEMS_DIR'] = str(tmp_path / 'problems')
    yield app
    utils.drop_db()


@pytest.fixture
def client(app) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def forge_client(app):
    '''
    return a function that builds a client already logged in as `username`
    '''

    def cookie_client(username: str) -> FlaskClient:
        client = app.test_client()
        user = User(username)
        AuthToken.revoke_all(user)
        token = AuthToken.issue(user)
        client.set_cookie('auth_token', token.token)
        return client

    return cookie_client


@pytest.fixture
def client_admin(forge_client):
    return forge_client('first_admin')
