import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware

from saas.core.config import get_settings
from saas.routers import auth as auth_router
from saas.routers import items as items_router
from saas.routers import pages as pages_router
from saas.services.app_state import AppState

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; style-src 'self' 'unsafe-inline'; form-action 'self'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "same-origin")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app(state: AppState | None = None) -> FastAPI:
    """Factory compatible with uvicorn (``uvicorn saas.app:create_app --factory``)."""
    settings = state.settings if state is not None else get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    application = FastAPI(title="My Simple SaaS App")
    application.state.app_state = state if state is not None else AppState(settings=settings)
    application.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    application.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    application.include_router(pages_router.router)
    application.include_router(auth_router.router)
    application.include_router(items_router.router)
    return application


app = create_app()
