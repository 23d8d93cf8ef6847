"""
Database engine + session factory.

SQLite for local dev, Postgres in production. Services open one session per
call through get_session() and close it in a finally block.
"""
import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from outreach.config import DATABASE_URL

MODEL_MODULES = (
    'user', 'page', 'analysis', 'campaign', 'draft',
    'message', 'reply', 'setting', 'audit_log',
)


class Base(DeclarativeBase):
    pass


# Hosted Postgres URLs often use postgres://; SQLAlchemy 2.x wants postgresql://
url = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

if url.startswith('sqlite'):
    engine = create_engine(url, connect_args={'check_same_thread': False})
else:
    engine = create_engine(url, pool_pre_ping=True, pool_size=5, max_overflow=10)

SessionLocal = sessionmaker(bind=engine)


def get_session():
    """Return a new DB session."""
    return SessionLocal()


def import_models():
    """Import every model module so Base.metadata knows all tables."""
    for name in MODEL_MODULES:
        importlib.import_module(f'outreach.models.{name}')
