"""
Schémas Pydantic pour les élèves et résultats typés de la passerelle de persistance.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, field_validator


class StudentForm(BaseModel):
    """Champs soumis par le formulaire de création / modification."""
    firstname: str
    lastname: str
    email: str

    @field_validator("firstname", "lastname", "email")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()


class StudentResponse(BaseModel):
    """Ligne de la table students telle qu'elle est transmise aux vues."""
    id: int
    firstname: str
    lastname: str
    email: str

    model_config = {"from_attributes": True}


class StoreErrorKind(str, Enum):
    CONSTRAINT = "constraint"    # unicité ou NOT NULL violés
    UNAVAILABLE = "unavailable"  # connexion perdue, base injoignable
    QUERY = "query"              # toute autre erreur remontée par la base


class StoreResult(BaseModel):
    """Résultat d'une opération de la passerelle : succès, ou échec avec sa catégorie."""
    error: Optional[StoreErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StudentListResult(StoreResult):
    students: List[StudentResponse] = []


class StudentLookupResult(StoreResult):
    student: Optional[StudentResponse] = None

    @property
    def found(self) -> bool:
        return self.ok and self.student is not None


class StudentWriteResult(StoreResult):
    """
    Résultat d'une écriture.
    `affected` vaut 0 pour une modification ou suppression d'un id inexistant (succès à vide).
    """
    student_id: Optional[int] = None
    affected: int = 0
