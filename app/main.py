import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi

from app.shared.config import settings
from app.shared.db import init_db

# Routers Import
from app.auth.api import router as auth_router
from app.notes.api import router as notes_router
from app.ai.api import router as ai_router

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "Auth", "description": "Sign up, sign in, refresh a session"},
    {"name": "Notes", "description": "Create, list, edit and delete your notes"},
    {"name": "AI", "description": "Summaries and available completion models"},
    {"name": "Health", "description": "Service health"},
]

app = FastAPI(
    title="NoteBrief",
    version="0.1.0",
    description="Personal notes with AI summaries.",
    openapi_tags=TAGS_METADATA,
)

# missing/malformed request fields are client errors, reported as 400
@app.exception_handler(RequestValidationError)
async def _validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

# ---- DEV-ONLY error handler (helps you see real errors in Swagger) ----
if settings.ENV == "dev":
    @app.exception_handler(Exception)
    async def _dev_ex_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

# ----------------------------------------------------------------------


@app.on_event("startup")
def _init_db():
    init_db()

@app.get("/healthz", tags=["Health"])
def healthz():
    return {"ok": True}

# Routers
app.include_router(auth_router)
app.include_router(notes_router)
app.include_router(ai_router)

# --- Custom OpenAPI: add bearerAuth + default security on the notes routes ---
PUBLIC_PATHS = ("/auth/register", "/auth/token", "/auth/refresh", "/healthz", "/ai/summarize", "/ai/models")

def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    schema.setdefault("components", {}).setdefault("securitySchemes", {})
    schema["components"]["securitySchemes"]["bearerAuth"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }
    for path, ops in schema.get("paths", {}).items():
        if path in PUBLIC_PATHS:
            continue
        for op in ops.values():
            op.setdefault("security", [{"bearerAuth": []}])
    app.openapi_schema = schema
    return app.openapi_schema

app.openapi = custom_openapi
