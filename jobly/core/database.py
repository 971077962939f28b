from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from jobly.core.config import settings


def _engine_options(url: str) -> dict:
    """Pool sizing applies to server databases only; SQLite gets thread-sharing instead."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": 10,  # Connection pool size
        "max_overflow": 20,  # Allow up to 20 connections beyond pool_size
    }


# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Alembic owns table creation ("alembic upgrade head"); this only makes
    sure the models are imported and registered on Base.metadata.
    """
    from jobly.models import company, job  # noqa: F401  Import models to register them
