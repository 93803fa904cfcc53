"""Engine factory. SQLite gets WAL pragmas, cross-thread use and explicit BEGIN."""
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine, create_engine
from sqlalchemy.engine.url import make_url

from contractai.db.config import DBConfig


def _ensure_sqlite_dir(db_url: str) -> None:
    database = make_url(db_url).database
    if database and database != ":memory:":
        Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def create_engine_from_config(cfg: DBConfig) -> Engine:
    if not cfg.db_url.startswith("sqlite"):
        return create_engine(cfg.db_url, echo=cfg.echo_sql, pool_pre_ping=True)

    _ensure_sqlite_dir(cfg.db_url)
    # Driver autocommit so journal_mode can be set on connect; sessions are
    # used from asyncio.to_thread workers.
    engine = create_engine(
        cfg.db_url,
        echo=cfg.echo_sql,
        connect_args={"isolation_level": None, "check_same_thread": False},
    )
    pragmas = (
        f"PRAGMA journal_mode={cfg.sqlite_journal_mode}",
        f"PRAGMA synchronous={cfg.sqlite_synchronous}",
        f"PRAGMA busy_timeout={cfg.sqlite_busy_timeout_ms}",
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record) -> None:
        cursor = dbapi_conn.cursor()
        try:
            for pragma in pragmas:
                cursor.execute(pragma)
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:
        # Driver autocommit skips the implicit BEGIN; emit it so rollback works.
        conn.exec_driver_sql("BEGIN")

    return engine
