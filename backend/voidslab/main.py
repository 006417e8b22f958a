"""
FastAPI application entrypoint.
Run with: uvicorn voidslab.main:app --reload --port 5000   (or: python -m voidslab)

  - Auth:       POST /api/register, POST /api/verify-email, POST /api/login, GET /api/me
  - Challenges: GET /api/challenges, POST /api/challenges (admin)
  - Health:     GET /health
Every other GET serves the static front-end from FRONTEND_DIR, falling back to index.html.
"""
import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from voidslab.api.auth import router as auth_router
from voidslab.api.challenges import router as challenges_router
from voidslab.api.errors import server_error
from voidslab.config import DEFAULT_SECRET_KEY, Settings, get_settings, settings
from voidslab.exceptions import AppError

app = FastAPI(
    title="Void's Laboratory API",
    description="Registration with email verification, JWT login, category-scoped challenges.",
    version="0.1.0",
)

_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins if _origins else ["*"],
    allow_credentials="*" not in _origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(challenges_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """422 with a plain message instead of the default {"detail": [...]}."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request: " + "; ".join(parts)},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Anything that escaped a route or dependency becomes ServerError JSON."""
    err = server_error(f"{request.method} {request.url.path}", exc, settings)
    return JSONResponse(status_code=err.status_code, content={"message": err.message})


@app.on_event("startup")
def startup():
    """Configure logging, refuse the default SECRET_KEY in production, create SQLite tables."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    _log = logging.getLogger("voidslab.main")
    if settings.is_production and (settings.secret_key or "").strip() == DEFAULT_SECRET_KEY:
        _log.critical("SECRET_KEY must be set in production. Set SECRET_KEY in env or .env.")
        raise RuntimeError("SECRET_KEY must be set in production. Set SECRET_KEY in env or .env.")
    if not (settings.admin_code or "").strip():
        _log.warning("ADMIN_CODE not set; nobody can register as admin.")
    if settings.mail_configured:
        _log.info("Resend: API key loaded. Verification emails will be sent.")
    else:
        _log.warning("Resend: No API key. Set RESEND_API_KEY to send verification emails (logging only).")
    from voidslab.database import init_sqlite_db
    init_sqlite_db()


@app.get("/health")
def health():
    """Health check (JSON)."""
    return {"status": "ok", "message": "Void's Laboratory API"}


def _frontend_file(frontend_dir: Path, rel_path: str) -> Path | None:
    """Existing file under frontend_dir for rel_path; None if missing or outside the directory."""
    root = frontend_dir.resolve()
    if not rel_path:
        return None
    candidate = (root / rel_path).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


@app.get("/{full_path:path}", include_in_schema=False)
def frontend(full_path: str, cfg: Settings = Depends(get_settings)):
    """Static front-end with single-page fallback. Unknown /api paths stay JSON 404s."""
    if full_path == "api" or full_path.startswith("api/"):
        return JSONResponse(status_code=404, content={"message": "Not found"})
    found = _frontend_file(cfg.frontend_dir, full_path)
    if found:
        return FileResponse(found)
    index = _frontend_file(cfg.frontend_dir, "index.html")
    if index:
        return FileResponse(index)
    return JSONResponse(status_code=404, content={"message": "Not found"})
