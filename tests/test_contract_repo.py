"""Contracts table: session scope, repository ownership rules, SQL sink."""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text

from contractai.db.exceptions import ForbiddenError, NotFoundError
from contractai.db.models.contract import Contract
from contractai.db.repositories.contract_repo import ContractRepo
from contractai.db.schemas.contract import ContractCreate
from contractai.db.services.contract_sink import SqlContractSink
from contractai.db.session import session_scope


def _record(user_id: str | None = "user-1", name: str = "Lease") -> ContractCreate:
    return ContractCreate(
        user_id=user_id,
        name=name,
        file_type="application/pdf",
        content="The tenant shall pay rent monthly.",
        summary="Monthly rent.",
        analysis={"keyInsights": ["Monthly rent"], "potentialIssues": [], "recommendations": []},
    )


def test_sqlite_pragmas_applied(sync_engine):
    """Verify SQLite PRAGMAs are applied on connect."""
    with sync_engine.connect() as conn:
        assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        assert conn.execute(text("PRAGMA synchronous")).scalar() == 1  # NORMAL = 1


def test_session_scope_rolls_back_on_error(initialized_db):
    with pytest.raises(RuntimeError):
        with session_scope() as s:
            ContractRepo().create(s, _record())
            raise RuntimeError("abort")
    with session_scope() as s:
        assert s.execute(text("SELECT COUNT(*) FROM contracts")).scalar() == 0


def test_create_and_get_roundtrips_analysis(initialized_db):
    with session_scope() as s:
        dto = ContractRepo().create(s, _record())
    assert dto.status == "analyzed"
    with session_scope() as s:
        loaded = ContractRepo().get_by_id(s, dto.id)
    assert loaded is not None
    assert loaded.analysis == {"keyInsights": ["Monthly rent"], "potentialIssues": [], "recommendations": []}
    api = loaded.to_api()
    assert api["fileType"] == "application/pdf"
    assert api["createdAt"] is not None


def test_get_owned_enforces_ownership(initialized_db):
    with session_scope() as s:
        dto = ContractRepo().create(s, _record(user_id="owner"))
    with session_scope() as s:
        assert ContractRepo().get_owned(s, dto.id, "owner").id == dto.id
        with pytest.raises(ForbiddenError):
            ContractRepo().get_owned(s, dto.id, "intruder")
        with pytest.raises(NotFoundError):
            ContractRepo().get_owned(s, "missing-id", "owner")


def test_list_by_user_newest_first(initialized_db):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    with session_scope() as s:
        for i, name in enumerate(["old", "middle", "new"]):
            s.add(
                Contract(
                    user_id="u1",
                    name=name,
                    file_type="text/plain",
                    content="c",
                    created_at=base + timedelta(days=i),
                )
            )
        s.add(Contract(user_id="u2", name="other", file_type="text/plain", content="c"))
    with session_scope() as s:
        names = [c.name for c in ContractRepo().list_by_user(s, "u1")]
    assert names == ["new", "middle", "old"]


def test_delete_owned(initialized_db):
    with session_scope() as s:
        dto = ContractRepo().create(s, _record(user_id="owner"))
    with pytest.raises(ForbiddenError):
        with session_scope() as s:
            ContractRepo().delete_owned(s, dto.id, "intruder")
    with session_scope() as s:
        ContractRepo().delete_owned(s, dto.id, "owner")
    with session_scope() as s:
        assert ContractRepo().get_by_id(s, dto.id) is None


@pytest.mark.asyncio
async def test_sql_sink_saves_contract(initialized_db):
    contract_id = await SqlContractSink().save_contract(_record(user_id=None, name="Anonymous upload"))
    with session_scope() as s:
        dto = ContractRepo().get_by_id(s, contract_id)
    assert dto is not None
    assert dto.user_id is None
    assert dto.name == "Anonymous upload"
    assert dto.summary == "Monthly rent."
