import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import InvalidApplicationIdError, SkillError
from .schemas import SkillRequest
from .services.skill_service import SkillService, get_skill_service
from .settings import get_settings


def setup_server_logging() -> logging.Logger:
    """Configure the package logger and return the server logger.

    Handlers go on the `babysitter` logger so the controller and service
    modules log through them too.
    """
    logs_dir = Path("logs")
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("babysitter.server")
    package_logger = logging.getLogger("babysitter")
    if package_logger.handlers:
        return logger

    package_logger.setLevel(get_settings().log_level)
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    package_logger.addHandler(ch)

    fh = RotatingFileHandler(logs_dir / "server.log", maxBytes=5_000_000, backupCount=3)
    fh.setFormatter(fmt)
    package_logger.addHandler(fh)

    return logger


def _cors_origins_list(origins: str) -> list[str]:
    """Parse CORS_ORIGINS into a list."""
    if not origins or origins.strip() == "*":
        return ["*"]
    return [o.strip() for o in origins.split(",") if o.strip()]


LOGGER = setup_server_logging()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the skill configuration at startup."""
    if settings.app_id:
        LOGGER.info("Accepting requests for applicationId=%s", settings.app_id)
    else:
        LOGGER.warning("APP_ID not set; applicationId validation is disabled")

    yield

    LOGGER.info("Shutting down...")


app = FastAPI(
    title="Babysitter Skill",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins_list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SkillError)
async def skill_error_handler(request: Request, exc: SkillError) -> JSONResponse:
    """Report skill errors to the platform as JSON with a 4xx status."""
    status_code = 403 if isinstance(exc, InvalidApplicationIdError) else 400
    LOGGER.warning("Skill request failed (%s): %s", exc.code, exc)
    return JSONResponse(status_code=status_code, content={"error": exc.code, "detail": str(exc)})


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check for load balancers and monitoring.

    Returns:
        dict[str, Any]: JSON response with status field.
    """
    return {"status": "ok"}


@app.post("/skill")
async def skill(
    body: SkillRequest,
    service: SkillService = Depends(get_skill_service),
) -> dict[str, Any]:
    """Run one dialog turn for a voice platform request.

    Expected Input (JSON):
        {
            "session": {"sessionId": str, "new": bool, "application": {...}, "attributes": {...}},
            "request": {"type": str, "requestId": str, "intent": {"name": str}}
        }

    Response Format:
        {"version": "1.0", "sessionAttributes": {...}, "response": {...}}
    """
    LOGGER.info(
        "Skill request type=%s session_id=%s",
        body.request.type,
        body.session.session_id,
    )
    return service.execute(body)
