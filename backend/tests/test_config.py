"""
Tests de la configuration (variables d'environnement).
"""

from sqlalchemy.engine import URL

from app.config import Settings


def test_valeurs_par_defaut(monkeypatch):
    for var in ("DB_HOST", "DB_USER", "DB_PASSWORD", "DB_NAME", "DB_PORT", "DATABASE_URL", "APP_PORT"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.APP_PORT == 3000
    assert s.DB_HOST is None
    assert s.DB_PORT is None


def test_url_construite_depuis_les_composants(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DB_HOST", "db.local")
    monkeypatch.setenv("DB_USER", "registry")
    monkeypatch.setenv("DB_PASSWORD", "p@ss/word")
    monkeypatch.setenv("DB_NAME", "school")
    monkeypatch.setenv("DB_PORT", "5433")
    monkeypatch.setenv("APP_PORT", "8080")

    s = Settings(_env_file=None)
    url = s.database_url
    assert isinstance(url, URL)
    assert url.host == "db.local"
    assert url.port == 5433
    assert url.username == "registry"
    assert url.password == "p@ss/word"
    assert url.database == "school"
    assert url.drivername == "postgresql+psycopg2"
    assert s.APP_PORT == 8080


def test_database_url_prioritaire(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///students.db")
    monkeypatch.setenv("DB_HOST", "ignored")
    assert Settings(_env_file=None).database_url == "sqlite:///students.db"
