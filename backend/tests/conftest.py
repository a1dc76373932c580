"""
Configuration partagée pour tous les tests.
La passerelle élèves est branchée sur une base SQLite en mémoire :
aucune connexion réelle à PostgreSQL.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.main import create_app
from app.services.student_gateway import StudentGateway, get_gateway


@pytest.fixture
def engine():
    """Moteur SQLite en mémoire partagé entre les threads du TestClient."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def gateway(engine):
    """Passerelle réelle, table students créée."""
    gw = StudentGateway(engine)
    assert gw.ensure_schema()
    return gw


@pytest.fixture
def app(gateway):
    return create_app(gateway=gateway)


@pytest.fixture
def client(app):
    """Client HTTP de test, redirections non suivies."""
    with TestClient(app, follow_redirects=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def mock_gateway(app):
    """Remplace la passerelle par un mock pour simuler les erreurs BDD."""
    gw = MagicMock(spec=StudentGateway)
    app.dependency_overrides[get_gateway] = lambda: gw
    return gw
