from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Form, Request
from fastapi.responses import RedirectResponse

from saas.core import csrf
from saas.core.busy import run_guarded
from saas.domain.errors import AppError
from saas.routers.pages import _state

router = APIRouter(prefix="/auth", tags=["auth"])


def _encode(value: str) -> str:
    return quote(value or "", safe="")


def _redirect(path: str, *, error: str = "", message: str = "") -> RedirectResponse:
    if error:
        path = f"{path}?error={_encode(error)}"
    elif message:
        path = f"{path}?message={_encode(message)}"
    return RedirectResponse(path, status_code=303)


@router.post("/register")
async def register(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form(""),
    csrf_token: str = Form(""),
):
    csrf.validate_csrf(request, csrf_token)
    state = _state(request)
    try:
        await run_guarded(state.guard, lambda: state.register(username, password, confirm_password))
    except AppError as exc:
        return _redirect("/register", error=exc.message)
    return _redirect("/login", message="Registration successful! Please login.")


@router.post("/login")
async def do_login(request: Request, username: str = Form(""), password: str = Form(""), csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    state = _state(request)
    try:
        await run_guarded(state.guard, lambda: state.login(username, password))
    except AppError as exc:
        return _redirect("/login", error=exc.message)
    return RedirectResponse("/dashboard", status_code=303)


@router.post("/logout")
def logout(request: Request, csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    _state(request).logout()
    return _redirect("/login", message="You have been logged out.")
