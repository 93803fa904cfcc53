"""Final analysis parsing and shape validation."""
import json

import pytest

from contractai.analysis.schema import (
    DetailedAnalysis,
    MinimalAnalysis,
    analysis_to_dict,
    parse_analysis,
)
from contractai.llm.errors import ErrorClass, LLMResponseInvalid


def test_parse_minimal(minimal_json) -> None:
    result = parse_analysis(minimal_json)
    assert isinstance(result, MinimalAnalysis)
    assert result.potential_issues == ["Auto-renewal clause"]
    assert analysis_to_dict(result) == json.loads(minimal_json)


def test_parse_strips_code_fence(minimal_json) -> None:
    result = parse_analysis(f"```json\n{minimal_json}\n```")
    assert result.key_insights == ["Term of 12 months"]


def test_invalid_json_is_fatal() -> None:
    with pytest.raises(LLMResponseInvalid) as exc_info:
        parse_analysis("I could not analyze this contract.")
    assert str(exc_info.value).startswith("Failed to parse analysis response as JSON")
    assert exc_info.value.error_class == ErrorClass.FATAL


def test_non_object_json_is_rejected() -> None:
    with pytest.raises(LLMResponseInvalid, match="JSON object"):
        parse_analysis('["a", "b"]')


def test_missing_required_key_is_rejected() -> None:
    with pytest.raises(LLMResponseInvalid, match="recommendations"):
        parse_analysis(json.dumps({"keyInsights": [], "potentialIssues": []}))


def test_wrong_value_type_is_rejected() -> None:
    raw = json.dumps({"keyInsights": "one", "potentialIssues": [], "recommendations": []})
    with pytest.raises(LLMResponseInvalid, match="keyInsights"):
        parse_analysis(raw)


def test_parse_detailed_defaults_financial_terms() -> None:
    raw = json.dumps(
        {
            "keyInsights": {"summary": "Sale contract", "points": ["Settlement in 30 days"]},
            "potentialIssues": {"summary": "Finance risk", "points": ["Tight finance clause"]},
            "recommendations": {"points": ["Obtain pre-approval"]},
            "financialTerms": {"additionalCosts": ["Stamp duty"]},
        }
    )
    result = parse_analysis(raw, "detailed")
    assert isinstance(result, DetailedAnalysis)
    out = analysis_to_dict(result)
    assert out["financialTerms"] == {
        "propertyValue": "Not specified",
        "paymentSchedule": "Not specified",
        "additionalCosts": ["Stamp duty"],
        "financialConditions": [],
    }
    assert "summary" not in out["recommendations"]


def test_detailed_variant_rejects_minimal_shape(minimal_json) -> None:
    with pytest.raises(LLMResponseInvalid):
        parse_analysis(minimal_json, "detailed")
