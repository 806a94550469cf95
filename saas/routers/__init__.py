"""
FastAPI routers grouped by concern (pages, auth, items).

Each module exposes an APIRouter included by saas.app. Routers read the shared
AppState from app.state and render Jinja2 templates; they never touch the
store directly.
"""
