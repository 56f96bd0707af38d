from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import Settings, settings as default_settings
from shared.core.database import AuthBase, Base, DatabaseClient
from shared.core.logging_config import setup_logging
from shared.helpers.exception_handler import setup_exception_handlers
from shared.models import users  # noqa: F401  registers the users table

from . import models  # noqa: F401
from .router import bookings_router, chat_router, payment_router, reviews_router, spaces_router
from .services.completion_client import CompletionClient
from .services.payment_client import PaymentClient


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.auth_db.dispose()
    app.state.parking_db.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Parkpal Parking Service API", lifespan=lifespan)

    app.state.settings = settings
    app.state.auth_db = DatabaseClient(settings.auth_database_url, AuthBase)
    app.state.parking_db = DatabaseClient(settings.parking_database_url, Base)
    app.state.completion_client = CompletionClient.from_settings(settings)
    app.state.payment_client = PaymentClient.from_settings(settings)

    # Create all tables
    app.state.auth_db.create_all()
    app.state.parking_db.create_all()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    # Include routers
    app.include_router(spaces_router.router)
    app.include_router(bookings_router.router)
    app.include_router(reviews_router.router)
    app.include_router(chat_router.router)
    app.include_router(payment_router.router)

    @app.get("/api/health")
    def health():
        return {"status": "healthy"}

    return app

