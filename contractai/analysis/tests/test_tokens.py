"""Token estimate: ceil(chars / 4)."""
from contractai.analysis.tokens import estimate_tokens


def test_estimate_tokens_rounds_up() -> None:
    assert estimate_tokens("") == 0
    assert estimate_tokens("a") == 1
    assert estimate_tokens("abcd") == 1
    assert estimate_tokens("abcde") == 2
    assert estimate_tokens("x" * 400) == 100


def test_estimate_tokens_counts_characters_not_bytes() -> None:
    assert estimate_tokens("éééé") == 1
