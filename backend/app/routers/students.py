"""
Router HTML pour les élèves.
GET  /                        → redirection vers la liste
GET  /students                → liste (message de statut optionnel)
GET  /students/new            → formulaire de création
POST /students                → création
GET  /students/{id}/edit      → formulaire de modification
POST /students/{id}/update    → mise à jour
POST /students/{id}/delete    → suppression
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from app.schemas.status import StatusMessage, read_status_message
from app.schemas.student import StudentForm
from app.services.student_gateway import StudentGateway, get_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Élèves"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

LIST_URL = "/students"

GENERIC_ERROR = "Something went wrong, please try again."
REQUIRED_FIELDS_ERROR = "All fields are required."
MSG_CREATED = "Student added successfully"
MSG_UPDATED = "Student updated"
MSG_DELETED = "Student removed"
MSG_NOT_FOUND = "Student not found"
MSG_DELETE_FAILED = "Unable to delete student"

# Plus grand id représentable par une colonne INTEGER 64 bits
MAX_STUDENT_ID = 2**63 - 1


def parse_student_id(raw: str) -> Optional[int]:
    """
    Convertit l'id du chemin en entier.
    Retourne None si la valeur ne peut désigner aucune ligne (non numérique, <= 0, hors bornes) :
    les handlers la traitent comme un élève introuvable.
    """
    try:
        value = int(raw)
    except ValueError:
        return None
    if not 1 <= value <= MAX_STUDENT_ID:
        return None
    return value


def redirect_to_list(alert: Optional[StatusMessage] = None) -> RedirectResponse:
    """Redirige vers la liste en portant le message de statut dans l'URL."""
    url = f"{LIST_URL}?{alert.as_query()}" if alert else LIST_URL
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def render_form(request: Request, action: str, student: Optional[dict], alert: Optional[StatusMessage] = None):
    """Affiche le formulaire élève en mode `create` ou `edit`."""
    title = "Add Student" if action == "create" else "Edit Student"
    return templates.TemplateResponse(
        request,
        "students/form.html",
        {"title": title, "student": student, "action": action, "alert": alert},
    )


@router.get("/", include_in_schema=False)
def root():
    return redirect_to_list()


@router.get("/students", response_class=HTMLResponse, summary="Lister les élèves")
def list_students(
    request: Request,
    alert: Optional[StatusMessage] = Depends(read_status_message),
    gateway: StudentGateway = Depends(get_gateway),
):
    """Liste tous les élèves, du plus récent au plus ancien. En cas d'erreur BDD : liste vide + message générique."""
    result = gateway.list_students()
    if not result.ok:
        alert = StatusMessage.error(GENERIC_ERROR)
    return templates.TemplateResponse(
        request,
        "students/index.html",
        {"title": "Students", "students": result.students, "alert": alert},
    )


@router.get("/students/new", response_class=HTMLResponse, summary="Formulaire de création")
def new_student(request: Request):
    return render_form(request, "create", None)


@router.post("/students", summary="Créer un élève")
def create_student(
    request: Request,
    firstname: str = Form(""),
    lastname: str = Form(""),
    email: str = Form(""),
    gateway: StudentGateway = Depends(get_gateway),
):
    """Crée un élève puis redirige. En cas d'échec, le formulaire est réaffiché avec la saisie."""
    submitted = {"firstname": firstname, "lastname": lastname, "email": email}
    try:
        data = StudentForm(**submitted)
    except ValidationError:
        return render_form(request, "create", submitted, StatusMessage.error(REQUIRED_FIELDS_ERROR))

    result = gateway.create_student(data.firstname, data.lastname, data.email)
    if not result.ok:
        return render_form(request, "create", submitted, StatusMessage.error(GENERIC_ERROR))

    logger.info("Élève %s créé.", result.student_id)
    return redirect_to_list(StatusMessage.success(MSG_CREATED))


@router.get("/students/{student_id}/edit", response_class=HTMLResponse, summary="Formulaire de modification")
def edit_student(request: Request, student_id: str, gateway: StudentGateway = Depends(get_gateway)):
    """Id invalide, erreur BDD ou élève introuvable → retour à la liste avec « Student not found »."""
    sid = parse_student_id(student_id)
    if sid is None:
        return redirect_to_list(StatusMessage.error(MSG_NOT_FOUND))
    result = gateway.get_student(sid)
    if not result.found:
        return redirect_to_list(StatusMessage.error(MSG_NOT_FOUND))
    return render_form(request, "edit", result.student.model_dump())


@router.post("/students/{student_id}/update", summary="Modifier un élève")
def update_student(
    request: Request,
    student_id: str,
    firstname: str = Form(""),
    lastname: str = Form(""),
    email: str = Form(""),
    gateway: StudentGateway = Depends(get_gateway),
):
    """Un id inexistant ou invalide n'est pas signalé : la mise à jour réussit à vide."""
    submitted = {"id": student_id, "firstname": firstname, "lastname": lastname, "email": email}
    try:
        data = StudentForm(firstname=firstname, lastname=lastname, email=email)
    except ValidationError:
        return render_form(request, "edit", submitted, StatusMessage.error(REQUIRED_FIELDS_ERROR))

    sid = parse_student_id(student_id)
    if sid is None:
        return redirect_to_list(StatusMessage.success(MSG_UPDATED))

    result = gateway.update_student(sid, data.firstname, data.lastname, data.email)
    if not result.ok:
        return render_form(request, "edit", submitted, StatusMessage.error(GENERIC_ERROR))
    return redirect_to_list(StatusMessage.success(MSG_UPDATED))


@router.post("/students/{student_id}/delete", summary="Supprimer un élève")
def delete_student(student_id: str, gateway: StudentGateway = Depends(get_gateway)):
    """Un id inexistant ou invalide ne désigne aucune ligne : suppression réussie à vide."""
    sid = parse_student_id(student_id)
    if sid is None:
        return redirect_to_list(StatusMessage.success(MSG_DELETED))
    result = gateway.delete_student(sid)
    if not result.ok:
        return redirect_to_list(StatusMessage.error(MSG_DELETE_FAILED))
    return redirect_to_list(StatusMessage.success(MSG_DELETED))
