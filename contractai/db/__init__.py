"""DB module: config, engine, session, models, repositories."""
from contractai.db.config import DBConfig
from contractai.db.session import init_db, session_scope

__all__ = ["DBConfig", "init_db", "session_scope"]
