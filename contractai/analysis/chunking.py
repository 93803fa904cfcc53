"""Split document text into token-bounded chunks on paragraph, then sentence, boundaries."""
from __future__ import annotations

import logging
import re
from typing import Iterator

from contractai.analysis.tokens import estimate_tokens

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"
SENTENCE_SEPARATOR = " "

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
# Text runs with any punctuation around them; leading punctuation (an ellipsis, a
# stray "?") stays with the sentence it opens.
_SENTENCE = re.compile(r"[.!?]*[^.!?]+[.!?]*")


def _sentences(paragraph: str) -> list[str]:
    out = [s.strip() for s in _SENTENCE.findall(paragraph) if s.strip()]
    return out or [paragraph]


def _units(text: str, max_tokens: int) -> Iterator[tuple[str, str]]:
    """Yield (separator, piece). Paragraphs that fit are one piece; oversized ones yield sentences."""
    for raw in _PARAGRAPH_SPLIT.split(text):
        para = raw.strip()
        if not para:
            continue
        if estimate_tokens(para) <= max_tokens:
            yield PARAGRAPH_SEPARATOR, para
            continue
        for i, sentence in enumerate(_sentences(para)):
            yield (PARAGRAPH_SEPARATOR if i == 0 else SENTENCE_SEPARATOR), sentence


def split_into_chunks(text: str, max_tokens: int) -> list[str]:
    """
    Return ordered, non-empty chunks whose estimated tokens stay <= max_tokens.

    Greedy accumulate/flush over paragraphs; a paragraph that alone exceeds max_tokens is
    accumulated sentence by sentence instead. A single sentence above max_tokens is emitted
    as its own oversized chunk. Re-splitting join_chunks(result) yields the same chunks.
    """
    if max_tokens < 1:
        raise ValueError(f"max_tokens must be >= 1, got {max_tokens}")

    chunks: list[str] = []
    buf = ""
    for sep, piece in _units(text or "", max_tokens):
        candidate = f"{buf}{sep}{piece}" if buf else piece
        if buf and estimate_tokens(candidate) > max_tokens:
            chunks.append(buf)
            buf = piece
        else:
            buf = candidate
    if buf:
        chunks.append(buf)

    oversized = sum(1 for c in chunks if estimate_tokens(c) > max_tokens)
    if oversized:
        logger.warning("%d chunk(s) exceed %d tokens (unsplittable sentence)", oversized, max_tokens)
    return chunks


def join_chunks(chunks: list[str]) -> str:
    """Join chunks or summaries with the blank-line separator used throughout the pipeline."""
    return PARAGRAPH_SEPARATOR.join(chunks)
