"""Fixtures for analysis tests: scripted completion client and recorded sleep."""
from __future__ import annotations

import json
from typing import Any, Callable

import pytest

from contractai.analysis.prompts import CONDENSE_SYSTEM
from contractai.analysis.settings import AnalysisSettings

MINIMAL_JSON = json.dumps(
    {
        "keyInsights": ["Term of 12 months"],
        "potentialIssues": ["Auto-renewal clause"],
        "recommendations": ["Negotiate a termination notice period"],
    }
)


class ScriptedClient:
    """
    Completion client double. Each call consumes the next scripted item for its kind
    (chunk / condense / analysis); an exception instance is raised, a string returned.
    Once a script is exhausted, the fallback callable produces the reply.
    """

    def __init__(
        self,
        *,
        chunk: list[Any] | None = None,
        condense: list[Any] | None = None,
        analysis: list[Any] | None = None,
        chunk_fallback: Callable[[str], str] | None = None,
        condense_fallback: Callable[[str], str] | None = None,
    ) -> None:
        self.scripts = {
            "chunk": list(chunk or []),
            "condense": list(condense or []),
            "analysis": list(analysis or [MINIMAL_JSON]),
        }
        self.fallbacks = {
            "chunk": chunk_fallback or (lambda user: "summary"),
            "condense": condense_fallback or (lambda user: "condensed"),
            "analysis": lambda user: MINIMAL_JSON,
        }
        self.calls: list[dict[str, Any]] = []

    @staticmethod
    def kind_of(system_prompt: str, json_mode: bool) -> str:
        if json_mode:
            return "analysis"
        if system_prompt == CONDENSE_SYSTEM:
            return "condense"
        return "chunk"

    def count(self, kind: str) -> int:
        return sum(1 for c in self.calls if c["kind"] == kind)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_output_tokens: int | None = None,
        temperature: float | None = None,
        json_mode: bool = False,
        timeout_s: float | None = None,
    ) -> str:
        kind = self.kind_of(system_prompt, json_mode)
        self.calls.append(
            {
                "kind": kind,
                "system": system_prompt,
                "user": user_prompt,
                "max_output_tokens": max_output_tokens,
                "temperature": temperature,
                "json_mode": json_mode,
                "timeout_s": timeout_s,
            }
        )
        script = self.scripts[kind]
        item = script.pop(0) if script else self.fallbacks[kind](user_prompt)
        if isinstance(item, Exception):
            raise item
        return item


class RecordedSleep:
    """Async sleep replacement that records requested delays and returns immediately."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def make_client() -> Callable[..., ScriptedClient]:
    return ScriptedClient


@pytest.fixture
def minimal_json() -> str:
    return MINIMAL_JSON


@pytest.fixture
def sleep() -> RecordedSleep:
    return RecordedSleep()


@pytest.fixture
def settings() -> AnalysisSettings:
    """Small budgets so tests can force several chunks with short text; no .env lookup."""
    return AnalysisSettings(
        _env_file=None,
        chunk_max_tokens=10,
        condense_threshold_tokens=10_000,
        condense_chunk_tokens=10,
        ping_interval_s=60.0,
    )
