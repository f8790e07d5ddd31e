import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .database import Database
from .routers import leaderboard, submissions
from .spa import StaticSiteResponder

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    database: Database = app.state.database
    # Refuse to serve without storage: a failure here aborts startup.
    await database.init_schema()
    yield
    await database.dispose()


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    locations = {error["loc"][0] for error in exc.errors() if error.get("loc")}
    detail = "Invalid request body" if "body" in locations else "Invalid request parameters"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url, echo=settings.database_echo)

    # Sits inside CORSMiddleware: CORS preflights are answered there with
    # headers, any other OPTIONS gets a bare 200 here.
    @app.middleware("http")
    async def short_circuit_options(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK)
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.cors_origins],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(submissions.router, prefix=settings.api_prefix)
    app.include_router(leaderboard.router, prefix=settings.api_prefix)

    @app.get("/healthz")
    async def healthcheck():
        return {"status": "ok"}

    if settings.static_dir:
        static_root = Path(settings.static_dir)
        if static_root.is_dir():
            app.add_exception_handler(
                status.HTTP_404_NOT_FOUND,
                StaticSiteResponder(static_root, api_prefix=settings.api_prefix),
            )
        else:
            logger.warning("Static directory %s does not exist; front end will not be served.", static_root)

    return app


app = create_app()
