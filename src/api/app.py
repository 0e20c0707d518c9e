import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlmodel import SQLModel

from src.adapter.repositories.line_item_repository import LINE_ITEMS_ROUTINE_SQL
from src.api.error import ClientError, client_error_handler
from src.api.routes import auth, invoices, render
from src.app.use_cases.invoices.errors import VALIDATION_ERROR
from src.depends import engine

# Registers the tables on SQLModel.metadata
from src.domain import Invoice, LineItem  # noqa: F401

logger = logging.getLogger(__name__)

STATIC_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "web", "static")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def init_database(config) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
        if engine.dialect.name == "postgresql" and config.LINE_ITEMS_ROUTINE:
            await conn.execute(text(LINE_ITEMS_ROUTINE_SQL.format(name=config.LINE_ITEMS_ROUTINE)))
            logger.info(f"Installed line item routine {config.LINE_ITEMS_ROUTINE}")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request parameters") if errors else "Invalid request parameters"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": {"code": VALIDATION_ERROR, "message": message}},
    )


def create_app(config) -> FastAPI:
    configure_logging(config.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_database(config)
        yield
        await engine.dispose()

    app = FastAPI(title="Invoice Service", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.include_router(invoices.router)
    app.include_router(auth.router)
    if config.RENDER_SERVICE_ENABLED:
        app.include_router(render.router)

    return app


def create_render_app(config) -> FastAPI:
    """Rendering service on its own, without database or auth"""
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(title="Invoice Rendering Service")
    app.include_router(render.router)
    return app
