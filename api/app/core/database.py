from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(engine) -> None:
    """Replace SQLite's ASCII-only lower() with Python's Unicode one."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def build_engine(db_url: str):
    """Create an engine with pool options suited to the backend."""
    if db_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory databases live as long as their single connection
            engine = create_engine(db_url, connect_args=connect_args, poolclass=StaticPool)
        else:
            engine = create_engine(db_url, connect_args=connect_args)
        _register_sqlite_functions(engine)
        return engine

    return create_engine(
        db_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


db_url = settings.sqlalchemy_url
logger.info(f"Connecting to database: {db_url[:20]}...")  # Log partial URL for debugging

engine = build_engine(db_url)


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db(bind=None):
    """Initialize database tables."""
    # Import models so they register with SQLModel metadata
    from app.models import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
