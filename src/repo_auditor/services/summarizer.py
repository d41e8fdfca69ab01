"""README summarization — best-effort wrapper around the LLM gateway."""

from __future__ import annotations

import logging

from repo_auditor.domain.entities import SUMMARY_FAILED
from repo_auditor.domain.ports.llm_gateway import LlmGateway
from repo_auditor.services.redaction import redact_secrets
from repo_auditor.services.token_budget import truncate_to_budget

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant that summarizes GitHub repos clearly."
USER_PROMPT_TEMPLATE = "Summarize this repository content:\n{readme}"


class ReadmeSummarizer:
    """Turns README text into a short summary.

    Parameters
    ----------
    llm_gateway:
        Adapter that can send prompts to an LLM, or ``None`` when no
        summarization backend is configured.
    max_summary_tokens:
        Completion cap passed to the model.
    max_readme_tokens:
        READMEs longer than this are truncated before being sent.
    """

    def __init__(
        self,
        llm_gateway: LlmGateway | None,
        max_summary_tokens: int = 300,
        max_readme_tokens: int = 12_000,
    ) -> None:
        self._llm = llm_gateway
        self._max_summary_tokens = max_summary_tokens
        self._max_readme_tokens = max_readme_tokens

    @property
    def configured(self) -> bool:
        return self._llm is not None

    async def summarize(self, readme: str) -> str | None:
        """Return a summary of *readme*.

        ``None`` when no gateway is configured; the sentinel
        :data:`SUMMARY_FAILED` when the gateway fails for any reason.
        """
        if self._llm is None:
            return None

        try:
            text, redactions = redact_secrets(readme)
            if redactions:
                logger.warning("Redacted %d potential secret(s) from README", redactions)
            text = truncate_to_budget(text, self._max_readme_tokens)

            return await self._llm.complete(
                SYSTEM_PROMPT,
                USER_PROMPT_TEMPLATE.format(readme=text),
                max_tokens=self._max_summary_tokens,
            )
        except Exception:
            logger.warning("Summary generation failed", exc_info=True)
            return SUMMARY_FAILED
