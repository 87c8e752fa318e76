from dormitory.config import DATABASE_URL

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def build_engine(url: str = DATABASE_URL):
    if url.startswith("sqlite"):
        # A single shared connection keeps in-memory databases alive
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True)


def build_session_factory(bind):
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine()
