# FILE: aibuilder/server.py
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from aibuilder.api import ai, auth, credits, image, projects, rooms, root, voice
from aibuilder.api.deps import enforce_rate_limit
from aibuilder.core.config import CORS_ORIGINS, LOG_LEVEL, configured_services
from aibuilder.core.database import init_models
from aibuilder.core.errors import AppError
from aibuilder.schemas.envelope import Err
from aibuilder.services.project_rooms import ProjectRooms
from aibuilder.services.project_store import DemoProjectStore
from aibuilder.services.rate_limiter import RateLimiter

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("aibuilder")

STARTED_AT = time.time()


def _err(status_code: int, error: str, code: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Err(error=error, code=code).model_dump(exclude_none=True),
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    msg = str(first.get("msg") or "Invalid request")
    # our own validators already produce user-facing text
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"{field}: {msg}" if field else msg


def _log_vendor_status() -> None:
    services = configured_services()
    for name, enabled in services.items():
        logger.info(f"{name} providers: {'✅ configured' if enabled else '❌ not configured'}")


def create_app() -> FastAPI:
    app = FastAPI(title="AI Builder API")

    # demo identity's projects; lives and dies with this app instance
    app.state.demo_projects = DemoProjectStore()
    app.state.rate_limiter = RateLimiter()
    app.state.project_rooms = ProjectRooms()

    for r in (root, auth, projects, ai, image, voice, credits):
        app.include_router(r.router, dependencies=[Depends(enforce_rate_limit)])
    app.include_router(rooms.router)

    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _err(exc.status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _err(400, _validation_message(exc), "VALIDATION_ERROR")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return _err(exc.status_code, message)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _err(500, "Internal server error")

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.time() - STARTED_AT,
            "services": configured_services(),
        }

    @app.on_event("startup")
    async def startup():
        await init_models()
        _log_vendor_status()

    return app


app = create_app()
