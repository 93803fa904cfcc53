"""Factory: build a ContractAnalyzer with default adapters (LiteLLM client, SQL sink)."""
from __future__ import annotations

from contractai.analysis.contracts import ContractSinkPort
from contractai.analysis.orchestrator import ContractAnalyzer
from contractai.analysis.settings import AnalysisSettings
from contractai.llm.client_litellm import LiteLLMClient
from contractai.llm.ports import CompletionClientPort
from contractai.llm.settings import LLMSettings


def create_contract_analyzer(
    *,
    settings: AnalysisSettings | None = None,
    llm_settings: LLMSettings | None = None,
    client: CompletionClientPort | None = None,
    sink: ContractSinkPort | None = None,
    persist: bool = True,
) -> ContractAnalyzer:
    """Wire adapters. The client is stateless, so one analyzer can serve the whole process."""
    llm_settings = llm_settings or LLMSettings()
    client = client or LiteLLMClient(llm_settings)
    if sink is None and persist:
        from contractai.db.services.contract_sink import SqlContractSink

        sink = SqlContractSink()
    return ContractAnalyzer(
        client,
        settings or AnalysisSettings(),
        llm_settings=llm_settings,
        sink=sink,
    )
