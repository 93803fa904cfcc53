"""Pytest config and fixtures for db and api tests."""
import os
import tempfile
import pytest

from contractai.db.config import DBConfig
from contractai.db.engine import create_engine_from_config
from contractai.db.session import init_db

# Import models so Base.metadata has all tables
import contractai.db.models  # noqa: F401


@pytest.fixture
def temp_db_url() -> str:
    """SQLite URL for a temporary file (WAL-friendly)."""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield f"sqlite:///{path}"
    for suffix in ("", "-wal", "-shm"):
        try:
            os.unlink(path + suffix)
        except OSError:
            pass


@pytest.fixture
def db_config(temp_db_url: str) -> DBConfig:
    """DBConfig pointing to temp SQLite file."""
    return DBConfig(_env_file=None, db_url=temp_db_url, echo_sql=False, create_tables=True)


@pytest.fixture
def sync_engine(db_config: DBConfig):
    """Sync engine for temp DB."""
    return create_engine_from_config(db_config)


@pytest.fixture
def initialized_db(db_config: DBConfig) -> DBConfig:
    """Module-level session factory bound to the temp DB, tables created."""
    init_db(db_config)
    return db_config
