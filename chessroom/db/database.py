"""Generate database engine / sessions from the settings"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chessroom.core.config import Settings, get_settings
from chessroom.db.schema import Base


def build_engine(settings: Optional[Settings] = None) -> Engine:
    """Engine for the configured database. Ensures all tables are created."""
    settings = settings or get_settings()
    engine = create_engine(settings.database_url, echo=settings.echo_sql)
    Base.metadata.create_all(bind=engine)
    return engine


@contextmanager
def session_scope(engine: Engine) -> Generator[Session, None, None]:
    db = sessionmaker(bind=engine)()
    try:
        yield db
    finally:
        db.close()
