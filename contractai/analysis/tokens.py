"""Token estimate from character length. Sizing only; callers tolerate over/under-estimation."""
import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    return math.ceil(len(text or "") / CHARS_PER_TOKEN)
