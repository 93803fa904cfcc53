"""
Analysis pipeline: chunking, retry/backoff, condensation and the final structured analysis.
Public API: ContractAnalyzer, create_contract_analyzer, split_into_chunks, estimate_tokens, with_retry.
"""
from contractai.analysis.chunking import join_chunks, split_into_chunks
from contractai.analysis.errors import (
    AnalysisError,
    AnalysisTimeoutError,
    CapabilityNotConfiguredError,
    ChunkFailedError,
    InvalidInputError,
)
from contractai.analysis.factory import create_contract_analyzer
from contractai.analysis.orchestrator import AnalysisOutcome, ContractAnalyzer
from contractai.analysis.retry import RetryPolicy, classify_error, pace, with_retry
from contractai.analysis.schema import (
    DetailedAnalysis,
    MinimalAnalysis,
    analysis_to_dict,
    parse_analysis,
)
from contractai.analysis.settings import AnalysisSettings
from contractai.analysis.tokens import estimate_tokens

__all__ = [
    "ContractAnalyzer",
    "AnalysisOutcome",
    "AnalysisSettings",
    "create_contract_analyzer",
    "split_into_chunks",
    "join_chunks",
    "estimate_tokens",
    "with_retry",
    "pace",
    "classify_error",
    "RetryPolicy",
    "parse_analysis",
    "analysis_to_dict",
    "MinimalAnalysis",
    "DetailedAnalysis",
    "AnalysisError",
    "InvalidInputError",
    "CapabilityNotConfiguredError",
    "ChunkFailedError",
    "AnalysisTimeoutError",
]
