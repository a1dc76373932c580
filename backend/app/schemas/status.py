"""
Message de statut éphémère transmis d'un handler à la vue liste via l'URL de redirection.
"""

from enum import Enum
from typing import Optional
from urllib.parse import urlencode

from fastapi import Query
from pydantic import BaseModel


class StatusType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class StatusMessage(BaseModel):
    type: StatusType = StatusType.SUCCESS
    message: str

    @classmethod
    def success(cls, message: str) -> "StatusMessage":
        return cls(type=StatusType.SUCCESS, message=message)

    @classmethod
    def error(cls, message: str) -> "StatusMessage":
        return cls(type=StatusType.ERROR, message=message)

    def as_query(self) -> str:
        """Encode le message pour l'URL de redirection (?message=...&type=...)."""
        return urlencode({"message": self.message, "type": self.type.value})


def read_status_message(
    message: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
) -> Optional[StatusMessage]:
    """
    Dépendance FastAPI — relit le message porté par la redirection.
    Un type inconnu retombe sur `success`.
    """
    if not message:
        return None
    try:
        status_type = StatusType(type) if type else StatusType.SUCCESS
    except ValueError:
        status_type = StatusType.SUCCESS
    return StatusMessage(type=status_type, message=message)
