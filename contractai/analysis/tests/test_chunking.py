"""Chunker: bounds, order, paragraph and sentence fallback, determinism."""
import logging

import pytest

from contractai.analysis.chunking import join_chunks, split_into_chunks
from contractai.analysis.tokens import estimate_tokens


def test_empty_or_blank_text_yields_no_chunks() -> None:
    assert split_into_chunks("", 10) == []
    assert split_into_chunks("  \n\n \n ", 10) == []


def test_small_paragraphs_are_combined() -> None:
    assert split_into_chunks("aaa\n\nbbb", 10) == ["aaa\n\nbbb"]


def test_paragraphs_flush_when_ceiling_is_reached() -> None:
    a, b = "A" * 30, "B" * 30
    chunks = split_into_chunks(f"{a}\n\n{b}", 10)
    assert chunks == [a, b]


def test_oversized_paragraph_falls_back_to_sentences() -> None:
    text = "First sentence here. Second sentence here. Third one is here."
    chunks = split_into_chunks(text, 6)
    assert chunks == ["First sentence here.", "Second sentence here.", "Third one is here."]
    assert all(estimate_tokens(c) <= 6 for c in chunks)


def test_sentence_split_keeps_leading_punctuation() -> None:
    text = "...and the tenant pays rent monthly. The landlord repairs the roof."
    chunks = split_into_chunks(text, 10)
    assert chunks == ["...and the tenant pays rent monthly.", "The landlord repairs the roof."]
    assert "".join(join_chunks(chunks).split()) == "".join(text.split())
    assert split_into_chunks(join_chunks(chunks), 10) == chunks


def test_punctuation_only_paragraph_is_kept() -> None:
    text = "A" * 40 + "\n\n" + "." * 60
    assert split_into_chunks(text, 10) == ["A" * 40, "." * 60]


def test_unsplittable_sentence_becomes_one_oversized_chunk(caplog) -> None:
    long_sentence = "x" * 100
    with caplog.at_level(logging.WARNING, logger="contractai.analysis.chunking"):
        chunks = split_into_chunks(f"short.\n\n{long_sentence}", 10)
    assert chunks == ["short.", long_sentence]
    assert "exceed" in caplog.text


def test_chunks_preserve_order_and_content() -> None:
    paragraphs = [f"Clause {i}. The party shall pay {i * 100} dollars." for i in range(20)]
    text = "\n\n".join(paragraphs)
    chunks = split_into_chunks(text, 30)
    assert len(chunks) > 1
    assert all(c.strip() for c in chunks)
    assert all(estimate_tokens(c) <= 30 for c in chunks)
    assert join_chunks(chunks) == text


def test_resplitting_joined_chunks_is_stable() -> None:
    text = (
        "Preamble.\n\n"
        + " ".join(f"Sentence number {i} of the long clause." for i in range(12))
        + "\n\nShort tail paragraph.\n\n"
        + "y" * 90
    )
    chunks = split_into_chunks(text, 15)
    assert split_into_chunks(join_chunks(chunks), 15) == chunks
    assert split_into_chunks(text, 15) == chunks


@pytest.mark.parametrize("bad", [0, -5])
def test_invalid_ceiling_raises(bad: int) -> None:
    with pytest.raises(ValueError):
        split_into_chunks("text", bad)
