"""SQL-backed ContractSinkPort: sync session work pushed to a thread."""
from __future__ import annotations

import asyncio
import logging

from contractai.db.repositories.contract_repo import ContractRepo
from contractai.db.schemas.contract import ContractCreate
from contractai.db.session import session_scope

logger = logging.getLogger(__name__)


class SqlContractSink:
    """Persist analyzed contracts. Errors propagate; the orchestrator decides they are non-fatal."""

    def __init__(self, repo: ContractRepo | None = None) -> None:
        self._repo = repo or ContractRepo()

    def save_contract_sync(self, record: ContractCreate) -> str:
        with session_scope() as session:
            dto = self._repo.create(session, record)
        logger.debug("saved contract %s for user %s", dto.id, record.user_id)
        return dto.id

    async def save_contract(self, record: ContractCreate) -> str:
        return await asyncio.to_thread(self.save_contract_sync, record)
