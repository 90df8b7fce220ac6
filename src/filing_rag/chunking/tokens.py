"""Token estimation used for chunk sizing."""

from __future__ import annotations

import math
from collections.abc import Callable

CHARS_PER_TOKEN = 4

TokenCounter = Callable[[str], int]


def estimate_tokens(text: str) -> int:
    """Estimate tokens as one per four characters, rounded up.

    This is a sizing heuristic, not a model tokenizer. Pass a different
    ``TokenCounter`` to the chunker to swap it out.
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)
