"""
Shared fixtures: an app on in-memory SQLite, a test client and JWT helpers.
"""

import pytest
from flask_jwt_extended import create_access_token

from portal.extensions import db
from portal.main import create_app

ADMIN = "admin-principal"
CLIENT = "client-principal"
OTHER = "other-principal"


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    def make(principal):
        token = create_access_token(identity=principal)
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def admin_headers(auth_headers):
    return auth_headers(ADMIN)


@pytest.fixture
def client_headers(auth_headers):
    return auth_headers(CLIENT)


@pytest.fixture
def project_form():
    return {
        "clientName": "Kari Nordmann",
        "companyName": "Fjord AS",
        "email": "kari@fjord.no",
        "projectDescription": "Ny nettside med kundeportal",
        "timeline": "Innen juni",
        "budget": "range10_50kNOK",
    }


@pytest.fixture
def submission_id(client, client_headers, project_form):
    resp = client.post("/api/v1/submissions", json=project_form, headers=client_headers)
    assert resp.status_code == 201
    return resp.get_json()["projectId"]
