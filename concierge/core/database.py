import uuid

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from concierge.core.config import settings

Base = declarative_base()


def enable_sqlite_foreign_keys(engine):
    """SQLite ignores REFERENCES clauses unless the pragma is set per connection."""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)
if engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def generate_id() -> str:
    return str(uuid.uuid4())
