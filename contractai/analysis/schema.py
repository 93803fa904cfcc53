"""Analysis Result models and the single structural validator applied after the final call."""
from __future__ import annotations

import json
import re
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from contractai.llm.errors import LLMResponseInvalid

NOT_SPECIFIED = "Not specified"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MinimalAnalysis(_CamelModel):
    """keyInsights / potentialIssues / recommendations as string arrays."""

    key_insights: list[str] = Field(alias="keyInsights")
    potential_issues: list[str] = Field(alias="potentialIssues")
    recommendations: list[str] = Field(alias="recommendations")


class AnalysisSection(_CamelModel):
    summary: str | None = None
    points: list[str]


class FinancialTerms(_CamelModel):
    property_value: str = Field(default=NOT_SPECIFIED, alias="propertyValue")
    payment_schedule: str = Field(default=NOT_SPECIFIED, alias="paymentSchedule")
    additional_costs: list[str] = Field(default_factory=list, alias="additionalCosts")
    financial_conditions: list[str] = Field(default_factory=list, alias="financialConditions")


class DetailedAnalysis(_CamelModel):
    """Sections with summary + points, plus optional financial terms."""

    key_insights: AnalysisSection = Field(alias="keyInsights")
    potential_issues: AnalysisSection = Field(alias="potentialIssues")
    recommendations: AnalysisSection = Field(alias="recommendations")
    financial_terms: FinancialTerms | None = Field(default=None, alias="financialTerms")


AnalysisResult = Union[MinimalAnalysis, DetailedAnalysis]
AnalysisVariant = Literal["minimal", "detailed"]

_MODELS: dict[str, type[BaseModel]] = {"minimal": MinimalAnalysis, "detailed": DetailedAnalysis}


def _strip_json_block(raw: str) -> str:
    """Remove markdown code fence if present."""
    raw = raw.strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw)
    if raw.endswith("```"):
        raw = raw.rsplit("```", 1)[0]
    return raw.strip()


def parse_analysis(raw: str, variant: AnalysisVariant = "minimal") -> AnalysisResult:
    """
    Parse model output as JSON and validate the required fields for the variant.
    Raises LLMResponseInvalid (fatal, not retried) on unparsable JSON or wrong shape.
    """
    try:
        data: Any = json.loads(_strip_json_block(raw or ""))
    except json.JSONDecodeError as e:
        raise LLMResponseInvalid(
            f"Failed to parse analysis response as JSON: {e.msg}", details="json_decode"
        ) from e
    if not isinstance(data, dict):
        raise LLMResponseInvalid(
            f"Analysis response must be a JSON object, got {type(data).__name__}", details="shape"
        )
    try:
        return _MODELS[variant].model_validate(data)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise LLMResponseInvalid(
            f"Analysis response has an invalid shape: {', '.join(fields)}", details="shape"
        ) from e


def analysis_to_dict(result: AnalysisResult) -> dict[str, Any]:
    """Wire/storage form with camelCase keys."""
    return result.model_dump(by_alias=True, exclude_none=True)
