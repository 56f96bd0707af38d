# app/main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import Settings, settings as default_settings
from shared.core.database import AuthBase, Base, DatabaseClient
from shared.core.logging_config import setup_logging
from shared.helpers.exception_handler import setup_exception_handlers
from shared.models import users  # noqa: F401
from parking_service.app import models  # noqa: F401  owned spaces lookup
from .routers import authrouter, userrouter


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.auth_db.dispose()
    app.state.parking_db.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Parkpal Auth (Google)", lifespan=lifespan)

    app.state.settings = settings
    app.state.auth_db = DatabaseClient(settings.auth_database_url, AuthBase)
    app.state.parking_db = DatabaseClient(settings.parking_database_url, Base)

    # Create tables
    app.state.auth_db.create_all()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(authrouter.router)
    app.include_router(userrouter.router)

    @app.get("/api/auth/health")
    def health():
        return {"status": "healthy"}

    return app
