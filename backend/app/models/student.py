"""
Modèle SQLAlchemy pour la table students.
L'id est attribué par la base et n'est jamais réutilisé après une suppression.
"""

from sqlalchemy import Column, Integer, String

from app.database import Base


class Student(Base):
    __tablename__ = "students"
    # SQLite réutilise sinon le plus grand id supprimé
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    firstname = Column(String(50), nullable=False)
    lastname = Column(String(50), nullable=False)
    email = Column(String(100), unique=True, nullable=False)
