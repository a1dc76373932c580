"""
Passerelle de persistance des élèves.

Seul composant qui accède à la base. Chaque opération ouvre une session courte,
exécute une seule requête paramétrée, puis valide ou annule.
Aucune erreur de la base ni du driver ne sort d'ici : les échecs sont journalisés et
renvoyés sous forme de StoreResult avec leur catégorie (StoreErrorKind).
"""

import logging
from typing import Optional

from fastapi import Request
from sqlalchemy import delete, select, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.config import Settings
from app.database import Base, build_session_factory, create_db_engine
from app.models.student import Student
from app.schemas.student import (
    StoreErrorKind,
    StudentListResult,
    StudentLookupResult,
    StudentResponse,
    StudentWriteResult,
)

logger = logging.getLogger(__name__)

# Erreurs levées par la base ou par le driver lors de la liaison des paramètres
STORE_ERRORS = (SQLAlchemyError, OverflowError)


def classify_error(exc: Exception) -> StoreErrorKind:
    """Range une erreur de la base ou du driver dans l'une des catégories exposées aux handlers."""
    if isinstance(exc, IntegrityError):
        return StoreErrorKind.CONSTRAINT
    if isinstance(exc, (OperationalError, InterfaceError)) or getattr(exc, "connection_invalidated", False):
        return StoreErrorKind.UNAVAILABLE
    return StoreErrorKind.QUERY


class StudentGateway:
    """
    Détient le moteur SQLAlchemy pour toute la durée de vie de l'application.
    Ouvert au démarrage (lifespan), fermé à l'arrêt via close().
    """

    def __init__(self, engine: Engine, session_factory: Optional[sessionmaker] = None):
        self._engine = engine
        self._session_factory = session_factory or build_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "StudentGateway":
        return cls(create_db_engine(settings))

    def ensure_schema(self) -> bool:
        """
        Crée la table students si elle n'existe pas (idempotent).
        Un échec est journalisé mais non bloquant : l'API démarre quand même.
        """
        try:
            Base.metadata.create_all(bind=self._engine, tables=[Student.__table__])
        except SQLAlchemyError as exc:
            logger.error("Erreur lors de la création de la table students : %s", exc)
            return False
        logger.info("Table students prête.")
        return True

    def ping(self) -> bool:
        """Vérifie que la base répond (SELECT 1)."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Base injoignable : %s", exc)
            return False
        return True

    def close(self) -> None:
        """Libère le pool de connexions."""
        self._engine.dispose()
        logger.info("Connexions à la base fermées.")

    # --- Lecture ---

    def list_students(self) -> StudentListResult:
        """Tous les élèves, du plus récent au plus ancien (id décroissant)."""
        with self._session_factory() as db:
            try:
                rows = db.execute(
                    select(Student).order_by(Student.id.desc())
                ).scalars().all()
            except STORE_ERRORS as exc:
                return StudentListResult(error=self._fail(db, "list_students", exc))
            return StudentListResult(
                students=[StudentResponse.model_validate(row) for row in rows]
            )

    def get_student(self, student_id: int) -> StudentLookupResult:
        """Recherche par clé primaire. Introuvable = succès avec student=None."""
        with self._session_factory() as db:
            try:
                row = db.get(Student, student_id)
            except STORE_ERRORS as exc:
                return StudentLookupResult(error=self._fail(db, "get_student", exc))
            if row is None:
                return StudentLookupResult()
            return StudentLookupResult(student=StudentResponse.model_validate(row))

    # --- Écriture ---

    def create_student(self, firstname: str, lastname: str, email: str) -> StudentWriteResult:
        """Insère un élève ; échoue avec CONSTRAINT si l'email est déjà utilisé."""
        with self._session_factory() as db:
            student = Student(firstname=firstname, lastname=lastname, email=email)
            db.add(student)
            try:
                db.commit()
            except STORE_ERRORS as exc:
                return StudentWriteResult(error=self._fail(db, "create_student", exc))
            return StudentWriteResult(student_id=student.id, affected=1)

    def update_student(self, student_id: int, firstname: str, lastname: str, email: str) -> StudentWriteResult:
        """Met à jour les trois champs modifiables. Un id inexistant n'est pas une erreur."""
        with self._session_factory() as db:
            try:
                result = db.execute(
                    update(Student)
                    .where(Student.id == student_id)
                    .values(firstname=firstname, lastname=lastname, email=email)
                )
                db.commit()
            except STORE_ERRORS as exc:
                return StudentWriteResult(error=self._fail(db, "update_student", exc))
            return StudentWriteResult(student_id=student_id, affected=result.rowcount)

    def delete_student(self, student_id: int) -> StudentWriteResult:
        """Supprime définitivement un élève. Un id inexistant n'est pas une erreur."""
        with self._session_factory() as db:
            try:
                result = db.execute(delete(Student).where(Student.id == student_id))
                db.commit()
            except STORE_ERRORS as exc:
                return StudentWriteResult(error=self._fail(db, "delete_student", exc))
            return StudentWriteResult(student_id=student_id, affected=result.rowcount)

    def _fail(self, db, operation: str, exc: Exception) -> StoreErrorKind:
        """Annule la session, journalise l'erreur et renvoie sa catégorie."""
        db.rollback()
        kind = classify_error(exc)
        logger.error("%s a échoué (%s) : %s", operation, kind.value, exc)
        return kind


def get_gateway(request: Request) -> StudentGateway:
    """Dépendance FastAPI — fournit la passerelle ouverte au démarrage de l'application."""
    return request.app.state.gateway
