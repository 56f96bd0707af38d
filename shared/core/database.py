from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

# Separate bases
AuthBase = declarative_base()
Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2


class DatabaseClient:
    """Engine and session factory for one store, owned by the app that made it."""

    def __init__(self, url: str, base):
        self.url = url
        self.base = base
        if url.startswith("sqlite"):
            self.engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                url,
                pool_pre_ping=True,
                pool_recycle=300,
                pool_size=POOL_SIZE,          # max idle connections
                max_overflow=MAX_OVERFLOW,      # max temporary extra connections
                pool_timeout=30       # wait time before failing
            )
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        self.base.metadata.create_all(bind=self.engine)

    def session(self):
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self):
        self.engine.dispose()


# Dependency


def get_auth_db(request: Request):
    yield from request.app.state.auth_db.session()


def get_parking_db(request: Request):
    yield from request.app.state.parking_db.session()
