"""Contract DTOs and Create schema."""
import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContractCreate(BaseModel):
    """Record handed to the persistence collaborator after a successful analysis."""

    user_id: str | None = None
    name: str
    file_type: str
    content: str
    summary: str
    analysis: dict[str, Any]
    status: str = "analyzed"


class ContractDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str | None
    name: str
    file_type: str
    status: str
    summary: str | None
    analysis: dict[str, Any] | None = Field(default=None, alias="analysis_json")
    created_at: datetime | None = None

    @field_validator("analysis", mode="before")
    @classmethod
    def parse_analysis(cls, v: Any) -> dict[str, Any] | None:
        if v is None:
            return None
        if isinstance(v, dict):
            return v
        if isinstance(v, str):
            return json.loads(v) if v.strip() else None
        return None

    def to_api(self) -> dict[str, Any]:
        """camelCase listing shape (id, name, status, analysis, summary, createdAt, fileType)."""
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "analysis": self.analysis,
            "summary": self.summary,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "fileType": self.file_type,
        }
