"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.
"""

from typing import Optional, Union

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    # Base de données — composants séparés (aucune valeur par défaut)
    DB_HOST: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_NAME: Optional[str] = None
    DB_PORT: Optional[int] = None
    DB_DRIVER: str = "postgresql+psycopg2"
    DB_ECHO_SQL: bool = False

    # URL complète : prioritaire sur les composants DB_* si renseignée
    DATABASE_URL: Optional[str] = None

    # Serveur HTTP
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 3000

    # Logs
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def database_url(self) -> Union[str, URL]:
        """URL de connexion SQLAlchemy, construite à partir des DB_* si DATABASE_URL est absente."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            drivername=self.DB_DRIVER,
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )


settings = Settings()
