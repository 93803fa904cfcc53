"""Process-wide session factory and the commit/rollback scope used by repositories."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker

from contractai.db.base import Base
from contractai.db.config import DBConfig
from contractai.db.engine import create_engine_from_config

logger = logging.getLogger(__name__)

# Bound by init_db(); session_scope() binds the default config lazily.
_session_factory: sessionmaker[Session] | None = None


def init_db(cfg: DBConfig | None = None) -> None:
    """(Re)bind the session factory to cfg.db_url and create missing tables when enabled."""
    global _session_factory
    cfg = cfg or DBConfig()
    engine = create_engine_from_config(cfg)
    if cfg.create_tables:
        import contractai.db.models  # noqa: F401  register tables on Base.metadata

        Base.metadata.create_all(engine)
    # Detached DTOs are built after commit; keep loaded attributes readable.
    _session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    logger.info("database ready: %s", engine.url.render_as_string(hide_password=True))


@contextmanager
def session_scope() -> Iterator[Session]:
    """Commit on success, roll back and re-raise on any exception."""
    if _session_factory is None:
        init_db()
    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
