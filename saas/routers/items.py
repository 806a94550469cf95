from __future__ import annotations

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import RedirectResponse

from saas.core import csrf
from saas.core.busy import run_guarded
from saas.routers.pages import _state, render
from saas.services.app_state import AppState

router = APIRouter(prefix="", tags=["items"])


def _logged_in(request: Request) -> AppState | None:
    state = _state(request)
    return state if state.current_user else None


def _require_themed(state: AppState) -> None:
    if not state.settings.themed:
        raise HTTPException(404, "Not found")


def _back() -> RedirectResponse:
    return RedirectResponse("/dashboard", status_code=303)


def _to_login() -> RedirectResponse:
    return RedirectResponse("/login", status_code=303)


@router.get("/dashboard")
def dashboard(request: Request):
    state = _logged_in(request)
    if state is None:
        return RedirectResponse("/login", status_code=302)
    account = state.current_account
    return render(
        request,
        "dashboard.html",
        title="Dashboard",
        items=state.items,
        editing=state.editor.editing,
        last_updated=account.last_updated if account else None,
    )


@router.post("/items")
async def add_item(request: Request, text: str = Form(""), csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    state = _logged_in(request)
    if state is None:
        return _to_login()
    await run_guarded(state.guard, lambda: state.add_item(text))
    return _back()


@router.post("/items/{item_id}/delete")
async def delete_item(request: Request, item_id: int, csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    state = _logged_in(request)
    if state is None:
        return _to_login()
    await run_guarded(state.guard, lambda: state.delete_item(item_id))
    return _back()


@router.post("/items/{item_id}/edit")
def start_edit(request: Request, item_id: int, csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    state = _logged_in(request)
    if state is None:
        return _to_login()
    _require_themed(state)
    state.start_edit(item_id)
    return _back()


@router.post("/items/save")
async def save_edit(request: Request, text: str = Form(""), csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    state = _logged_in(request)
    if state is None:
        return _to_login()
    _require_themed(state)
    await run_guarded(state.guard, lambda: state.save_edit(text))
    return _back()


@router.post("/items/cancel")
def cancel_edit(request: Request, csrf_token: str = Form("")):
    csrf.validate_csrf(request, csrf_token)
    state = _logged_in(request)
    if state is None:
        return _to_login()
    _require_themed(state)
    state.cancel_edit()
    return _back()
