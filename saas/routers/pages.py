from __future__ import annotations

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse

from saas.core import csrf
from saas.services.app_state import AppState

router = APIRouter(prefix="", tags=["pages"])


def _state(request: Request) -> AppState:
    state = getattr(getattr(request.app, "state", None), "app_state", None)
    if state is None:
        raise RuntimeError("AppState not configured")
    return state


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


def local_path(value: str | None, default: str = "/") -> str:
    """Keep redirects on this site: a single leading slash, no scheme-relative or backslash tricks."""
    dest = (value or "").strip()
    if not dest.startswith("/") or dest.startswith("//") or "\\" in dest or any(ord(ch) < 0x20 for ch in dest):
        return default
    return dest


def render(request: Request, template: str, *, title: str, error: str = "", message: str = "", **extra):
    """Render a page with the shared layout context and refresh the CSRF cookie."""
    state = _state(request)
    token = csrf.ensure_csrf_token(request)
    context = {
        "title": title,
        "error": error,
        "message": message,
        "csrf_token": token,
        "user": state.current_user,
        "themed": state.settings.themed,
        "dark_mode": state.dark_mode,
    }
    context.update(extra)
    response = _templates(request).TemplateResponse(request, template, context)
    csrf.set_csrf_cookie(response, token)
    return response


@router.get("/")
def index(request: Request):
    dest = "/dashboard" if _state(request).current_user else "/login"
    return RedirectResponse(dest, status_code=302)


@router.get("/login")
def login_page(request: Request, error: str = "", message: str = ""):
    if _state(request).current_user:
        return RedirectResponse("/dashboard", status_code=302)
    return render(request, "login.html", title="Login", error=error, message=message)


@router.get("/register")
def register_page(request: Request, error: str = "", message: str = ""):
    return render(request, "register.html", title="Register", error=error, message=message)


@router.post("/theme")
def toggle_theme(request: Request, next: str = Form("/"), csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    state = _state(request)
    if not state.settings.themed:
        raise HTTPException(404, "Not found")
    state.toggle_theme()
    return RedirectResponse(local_path(next), status_code=303)
