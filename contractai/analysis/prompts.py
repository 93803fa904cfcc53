"""Prompts for chunk summaries, condensation and the final structured analysis."""
from __future__ import annotations

CHUNK_SYSTEM = (
    "You are a document analyst specializing in contract review. "
    "Provide a brief, focused summary."
)

CHUNK_USER_TEMPLATE = """This is section {index} of {total} of a contract.
Summarize its key points: parties, obligations, dates and deadlines, amounts, conditions and unusual clauses.

{chunk}"""

CONDENSE_SYSTEM = (
    "You are a document analyst specializing in contract review. "
    "Condense summaries without losing information."
)

CONDENSE_USER_TEMPLATE = """Condense the following contract summaries, preserving all key points, figures, dates and obligations:

{chunk}"""

ANALYSIS_SYSTEM = "You are a document analyst. Provide a concise analysis in JSON format."

MINIMAL_ANALYSIS_USER_TEMPLATE = """Based on these contract summaries, provide an analysis.
Return a JSON object with exactly these keys, each an array of strings:
"keyInsights", "potentialIssues", "recommendations".

{summary}"""

DETAILED_ANALYSIS_SYSTEM = """You are an expert contract analyst with deep knowledge of legal documents, particularly property contracts. Pay special attention to financial terms and property values. Return a JSON object with the following structure:

{
  "keyInsights": {"summary": "one-line summary of the contract type and main purpose", "points": ["4-5 most important aspects: critical dates, key conditions, financial implications, legal requirements, important clauses"]},
  "potentialIssues": {"summary": "brief overview of main risk areas", "points": ["4-5 key risks: timing, financial, legal, compliance, performance"]},
  "recommendations": {"summary": "key actions needed", "points": ["4-5 actionable recommendations: immediate actions, risk mitigation, compliance, due diligence, timeline management"]},
  "financialTerms": {
    "propertyValue": "exact property value/purchase price with currency symbol, or 'Not specified'",
    "paymentSchedule": "payment terms, deposit amounts and due dates, or 'Not specified'",
    "additionalCosts": ["stamp duty, registration fees, agent commissions, legal fees, other charges"],
    "financialConditions": ["finance approval, deposit conditions, payment milestones, financial contingencies"]
  }
}"""

DETAILED_ANALYSIS_USER_TEMPLATE = """Analyze this contract from the summaries below and provide detailed insights. Focus on meaningful analysis rather than just listing parties.

{summary}"""


def chunk_messages(chunk: str, index: int, total: int) -> tuple[str, str]:
    """(system, user) for summarizing chunk index (1-based) of total."""
    return CHUNK_SYSTEM, CHUNK_USER_TEMPLATE.format(index=index, total=total, chunk=chunk)


def condense_messages(chunk: str) -> tuple[str, str]:
    return CONDENSE_SYSTEM, CONDENSE_USER_TEMPLATE.format(chunk=chunk)


def analysis_messages(summary: str, variant: str = "minimal") -> tuple[str, str]:
    if variant == "detailed":
        return DETAILED_ANALYSIS_SYSTEM, DETAILED_ANALYSIS_USER_TEMPLATE.format(summary=summary)
    return ANALYSIS_SYSTEM, MINIMAL_ANALYSIS_USER_TEMPLATE.format(summary=summary)
