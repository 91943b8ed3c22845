# expense_backend/main.py
# FastAPI application: middleware, error handlers and routers

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from . import __version__, models
from .config import get_settings
from .errors import register_exception_handlers
from .routers import auth, expenses, system

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # A store that cannot be reached at startup is fatal
    try:
        models.check_connection()
    except SQLAlchemyError:
        logger.critical("Database connection failed: %s", models.engine.url.render_as_string(hide_password=True))
        raise
    logger.info("Connected to database %s", models.engine.url.render_as_string(hide_password=True))
    yield
    models.engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Expense Backend",
        description="Personal expense tracking: login and per-user expense records",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(system.router, tags=["system"])
    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(expenses.router, prefix="/expenses", tags=["expenses"])

    return app


app = create_app()
