"""
FastAPI app assembly: logging, middleware, error handlers and router wiring.
"""
import logging
import os

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from collab.api.error_handlers import register_error_handlers
from collab.api.users import router as users_router
from collab.api.projects import router as projects_router
from collab.api.teamspaces import router as teamspaces_router
from collab.api.tasks import router as tasks_router
from collab.api.chat import router as chat_router
from collab.api.audits import router as audits_router
from collab.utils.runtime import cors_origins, dev_mode_requested

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Team Collaboration Service",
    description="API for projects, teamspaces, tasks and teamspace chat.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

IDENTITY_HEADERS = (
    "x-auth-request-user",
    "x-auth-request-email",
    "x-forwarded-user",
    "x-forwarded-email",
)


# Middleware: enforce read-only for unauthenticated requests
@app.middleware("http")
async def enforce_readonly_for_guests(request: Request, call_next):
    if request.method in ("POST", "PUT", "PATCH", "DELETE") and not dev_mode_requested():
        if not any(request.headers.get(name) for name in IDENTITY_HEADERS):
            return JSONResponse(
                {"detail": "Guest mode is read-only. Sign in to perform changes."},
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
    return await call_next(request)


register_error_handlers(app)

app.include_router(users_router)
app.include_router(projects_router)
app.include_router(teamspaces_router)
app.include_router(tasks_router)
app.include_router(chat_router)
app.include_router(audits_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "collab-service"}
