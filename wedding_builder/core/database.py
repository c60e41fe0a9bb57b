"""
Database configuration and session management
"""

from sqlmodel import SQLModel, Session, create_engine
import structlog

from wedding_builder.core.config import get_settings

logger = structlog.get_logger(__name__)
settings = get_settings()

engine = create_engine(
    settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://"),
    echo=settings.DEBUG,
    pool_pre_ping=True,
)


def init_db():
    """Initialize database tables (local development only, Alembic owns production)"""
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created")


def get_session():
    """Dependency to get database session"""
    with Session(engine) as session:
        yield session
