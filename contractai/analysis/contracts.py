"""Minimal Protocols the orchestrator depends on (not concrete implementations)."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from contractai.db.schemas.contract import ContractCreate


@runtime_checkable
class ContractSinkPort(Protocol):
    """Best-effort persistence of an analyzed contract. Returns the record id."""

    async def save_contract(self, record: ContractCreate) -> str:
        ...
