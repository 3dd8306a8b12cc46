from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from promptfoundry.core.config import settings
from promptfoundry.db.base import Base


def _normalize_url(url: str) -> str:
    # Managed Postgres providers still hand out the legacy scheme.
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 1800,  # recycle connections every 30 min (avoid stale)
        "connect_args": {"connect_timeout": 5},
    }


DATABASE_URL = _normalize_url(settings.database_url)

engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create tables that do not exist yet (idempotent)."""
    # Model modules register themselves on Base.metadata when imported.
    from promptfoundry.models.customer import Customer  # noqa: F401
    from promptfoundry.models.license import License  # noqa: F401

    Base.metadata.create_all(bind=engine)
