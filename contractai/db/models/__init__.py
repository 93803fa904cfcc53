# ORM models: import all so Base.metadata has every table.
from contractai.db.models.contract import Contract

__all__ = ["Contract"]
