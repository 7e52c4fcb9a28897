from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from ledgerbook.core.config import settings

DATABASE_URL = settings.DATABASE_URL


def build_engine(url: str):
    if url.startswith("sqlite"):
        # in-memory sqlite must share one connection or every session sees an empty db
        extra = {}
        if url in ("sqlite://", "sqlite:///:memory:"):
            extra["poolclass"] = StaticPool
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            future=True,
            **extra,
        )

    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # drops dead connections automatically
        pool_size=5,
        max_overflow=10,
        future=True,
    )


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
