import os

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from portal.auth.service import auth_service
from portal.models import FEEDBACK_STATUSES
from portal.storage import JsonStore, get_store

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")
templates = Jinja2Templates(directory=TEMPLATES_DIR)

router = APIRouter(tags=["web"], include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
def submission_form(request: Request, store: JsonStore = Depends(get_store)):
    """Public feedback form."""
    return templates.TemplateResponse(request, "index.html", {
        "categories": store.read_categories(),
        "ratings": [1, 2, 3, 4, 5],
    })


@router.get("/admin", response_class=HTMLResponse)
def admin_dashboard(request: Request, store: JsonStore = Depends(get_store)):
    """
    Admin dashboard. Shows the login form until the session is authenticated;
    the dashboard itself talks to the JSON API from the browser.
    """
    is_admin = auth_service.is_admin(request.session)
    return templates.TemplateResponse(request, "admin.html", {
        "is_admin": is_admin,
        "categories": store.read_categories() if is_admin else [],
        "statuses": FEEDBACK_STATUSES,
        "ratings": [1, 2, 3, 4, 5],
    })
