"""Contract repository. Methods take the caller's session and never commit."""
from sqlalchemy import select
from sqlalchemy.orm import Session

from contractai.db.exceptions import ForbiddenError, NotFoundError
from contractai.db.models.contract import Contract
from contractai.db.schemas.contract import ContractCreate, ContractDTO
from contractai.db.utils import json_serialize


class ContractRepo:
    def create(self, session: Session, data: ContractCreate) -> ContractDTO:
        c = Contract(
            user_id=data.user_id,
            name=data.name,
            file_type=data.file_type,
            status=data.status,
            content=data.content,
            summary=data.summary,
            analysis_json=json_serialize(data.analysis),
        )
        session.add(c)
        session.flush()
        return ContractDTO.model_validate(c)

    def get_by_id(self, session: Session, contract_id: str) -> ContractDTO | None:
        row = session.get(Contract, contract_id)
        return ContractDTO.model_validate(row) if row else None

    def get_owned(self, session: Session, contract_id: str, user_id: str) -> ContractDTO:
        """Raise NotFoundError if missing, ForbiddenError if owned by someone else."""
        row = session.get(Contract, contract_id)
        if row is None:
            raise NotFoundError(f"Contract {contract_id} not found")
        if row.user_id != user_id:
            raise ForbiddenError(f"Contract {contract_id} belongs to another user")
        return ContractDTO.model_validate(row)

    def list_by_user(self, session: Session, user_id: str) -> list[ContractDTO]:
        """Newest first."""
        rows = session.execute(
            select(Contract)
            .where(Contract.user_id == user_id)
            .order_by(Contract.created_at.desc())
        ).scalars().all()
        return [ContractDTO.model_validate(r) for r in rows]

    def delete_owned(self, session: Session, contract_id: str, user_id: str) -> None:
        self.get_owned(session, contract_id, user_id)
        row = session.get(Contract, contract_id)
        session.delete(row)
        session.flush()
