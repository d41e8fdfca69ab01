"""Token-aware truncation of text sent to the summarizer.

Uses ``tiktoken`` so the README handed to the model never exceeds the
configured context allowance.
"""

from __future__ import annotations

import tiktoken

_ENCODING_NAME = "cl100k_base"  # gpt-3.5 / gpt-4 family
_TRUNCATION_MARKER = "\n[… README truncated]"

_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    global _encoder  # noqa: PLW0603
    if _encoder is None:
        _encoder = tiktoken.get_encoding(_ENCODING_NAME)
    return _encoder


def truncate_to_budget(text: str, max_tokens: int) -> str:
    """Truncate *text* to at most *max_tokens*, preferring a line boundary."""
    # Every BPE token covers at least one UTF-8 byte.
    if len(text.encode("utf-8")) <= max_tokens:
        return text

    tokens = _get_encoder().encode(text)
    if len(tokens) <= max_tokens:
        return text

    truncated = _get_encoder().decode(tokens[:max_tokens])

    last_nl = truncated.rfind("\n")
    if last_nl > len(truncated) // 2:
        truncated = truncated[: last_nl + 1]

    return truncated + _TRUNCATION_MARKER
