"""
Point d'entrée principal de l'application Student Registry.
Démarrage : uvicorn app.main:app --reload  (ou `student-registry`, port APP_PORT)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse

from app.config import Settings, settings as default_settings
from app.logging_config import setup_logging
from app.routers import students
from app.services.student_gateway import StudentGateway, get_gateway

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, gateway: Optional[StudentGateway] = None) -> FastAPI:
    """
    Construit l'application.
    Si aucune passerelle n'est fournie, elle est créée à partir de la configuration
    au démarrage et fermée à l'arrêt ; une passerelle injectée reste à la charge de l'appelant.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Cycle de vie : ouvre la passerelle BDD et s'assure que la table existe."""
        setup_logging(settings.LOG_LEVEL)
        owned = gateway is None
        app.state.gateway = StudentGateway.from_settings(settings) if owned else gateway
        # Non bloquant : en cas d'échec, les requêtes échoueront à l'étape SQL
        app.state.gateway.ensure_schema()
        yield
        if owned:
            app.state.gateway.close()

    app = FastAPI(
        title="Student Registry",
        description="Gestion CRUD des élèves",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(students.router)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
        """Journalise toute exception non gérée et renvoie une page d'erreur générique."""
        logger.error("Exception non gérée : %s", exc, exc_info=True)
        return students.templates.TemplateResponse(
            request,
            "error.html",
            {"title": "Error", "alert": None},
            status_code=500,
        )

    @app.get("/health", tags=["Santé"])
    def health_check(gateway: StudentGateway = Depends(get_gateway)):
        """Vérifie que l'API est opérationnelle et que la base répond."""
        return {"status": "ok", "store": "up" if gateway.ping() else "down"}

    return app


app = create_app()


def run() -> None:
    """Lance le serveur HTTP sur APP_HOST:APP_PORT."""
    import uvicorn

    uvicorn.run(app, host=default_settings.APP_HOST, port=default_settings.APP_PORT)
