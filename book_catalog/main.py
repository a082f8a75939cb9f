# book_catalog/main.py
import logging
from datetime import datetime, timezone
from http import HTTPStatus
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .catalog import catalog_router
from .config import Settings, settings as default_settings
from .errors import CatalogError, InternalError, ValidationError
from .storage import CatalogStore


logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept",
}

ENDPOINTS = [
    ("GET", "/books", "Get all books"),
    ("GET", "/books/:id", "Get book by ID"),
    ("POST", "/books", "Create new book"),
    ("PUT", "/books/:id", "Update book"),
    ("DELETE", "/books/:id", "Delete book"),
]


def _error(error: CatalogError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(store: Optional[CatalogStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around ``store``; a fresh one is created when omitted."""
    settings = settings or default_settings
    if store is None:
        store = CatalogStore.seeded() if settings.seed_books else CatalogStore()

    app = FastAPI(
        title=settings.app_name,
        description="Create, read, update and delete books held in memory.",
        version=settings.app_version,
    )
    app.state.store = store
    app.state.settings = settings

    # 🔹 CORS on every response, request log, and the last-resort 500
    @app.middleware("http")
    async def cors_and_logging(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            path = request.scope["path"]
            if len(path) > 1 and path.endswith("/"):
                # "/books/" is served as "/books"
                request.scope["path"] = path.rstrip("/") or "/"
            logger.info(
                "%s - %s %s",
                datetime.now(timezone.utc).isoformat(),
                request.method,
                request.url.path,
            )
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.exception("Error: %s", exc)
                response = _error(InternalError(str(exc)))
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        return _error(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(ValidationError("Request body must be valid JSON"))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods on known paths look the same.
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content={"error": "Not Found", "message": "Route not found"},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": HTTPStatus(exc.status_code).phrase, "message": str(exc.detail)},
        )

    @app.api_route("/", methods=["GET", "HEAD"], include_in_schema=False)
    def index():
        return FileResponse(PUBLIC_DIR / "index.html")

    app.include_router(catalog_router)
    app.mount("/static", StaticFiles(directory=str(PUBLIC_DIR / "static")), name="static")
    return app


app = create_app()


def log_banner(settings: Settings) -> None:
    logger.info("🚀 %s running on %s", settings.app_name, settings.base_url)
    logger.info("📚 API Endpoints:")
    for method, path, summary in ENDPOINTS:
        logger.info("   %-6s %-10s - %s", method, path, summary)


def run() -> None:
    import uvicorn

    logging.basicConfig(
        level=default_settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log_banner(default_settings)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, log_level="warning")


if __name__ == "__main__":
    run()
