"""
Configuration de la connexion à la base de données.
Le moteur n'est plus global : il est créé par la passerelle élèves au démarrage de l'API.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import Settings

Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Crée le moteur SQLAlchemy à partir de la configuration (aucune connexion ouverte ici)."""
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        echo=settings.DB_ECHO_SQL,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    """Fabrique de sessions courtes, une par requête."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
