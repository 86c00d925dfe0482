"""Let's Hang Web Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from lets_hang.core.config import settings
from lets_hang.core.database import create_db_and_tables
from lets_hang.core.scheduler import shutdown_scheduler, start_scheduler
from lets_hang.core.templating import STATIC_DIR, templates
from lets_hang.hangs.codes import CodeAllocationError
from lets_hang.routes import attendees, hangs, home, suggestions, view
from lets_hang.routes.hangs import wants_json
from lets_hang.view.session import assign_client_id

# Configure logging
log_dir = Path.home() / ".logs" / "lets_hang"
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup
    logger.info("Starting Let's Hang application")
    create_db_and_tables()
    start_scheduler()
    yield
    # Shutdown
    shutdown_scheduler()
    logger.info("Let's Hang application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Plan a hang, share its code, collect RSVPs and suggestions",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(assign_client_id)

# Mount static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Include routers
app.include_router(home.router)
app.include_router(hangs.router)
app.include_router(attendees.router)
app.include_router(suggestions.router)
app.include_router(view.router)


def _error_response(request: Request, message: str, status_code: int):
    """Flat user-visible error with a manual retry, or JSON for AJAX callers."""
    if wants_json(request):
        return JSONResponse({"detail": message}, status_code=status_code)

    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "app_name": settings.app_name,
            "message": message,
            "retry_url": request.headers.get("referer") or "/",
        },
        status_code=status_code,
    )


@app.exception_handler(SQLAlchemyError)
async def database_error(request: Request, exc: SQLAlchemyError):
    """Report store failures to the user. Nothing is retried automatically."""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return _error_response(request, "Something went wrong saving or loading hangs.", 500)


@app.exception_handler(CodeAllocationError)
async def code_allocation_error(request: Request, exc: CodeAllocationError):
    logger.error(f"Invite code allocation failed: {exc}")
    return _error_response(request, "Could not create an invite code. Please try again.", 503)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
