"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import logging

from openai import APITimeoutError, AsyncOpenAI, AuthenticationError, RateLimitError

from repo_auditor.domain.exceptions import LlmError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API."""

    def __init__(
        self, api_key: str, model: str = "gpt-3.5-turbo", timeout: float = 30.0
    ) -> None:
        # Single attempt per call; the caller degrades to a sentinel on failure.
        self._client = AsyncOpenAI(api_key=api_key, max_retries=0, timeout=timeout)
        self._model = model

    async def complete(
        self, system_prompt: str, user_prompt: str, *, max_tokens: int | None = None
    ) -> str:
        """Send a system + user prompt and return the completion text."""
        try:
            kwargs: dict[str, object] = {
                "model": self._model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            }
            if max_tokens is not None:
                kwargs["max_tokens"] = max_tokens

            response = await self._client.chat.completions.create(**kwargs)  # type: ignore[arg-type]

            content = response.choices[0].message.content
            if not content:
                raise LlmError("LLM returned an empty response.")

            return content.strip()

        except AuthenticationError as exc:
            raise LlmError(
                "Invalid OpenAI API key. "
                "Set a valid key in the OPENAI_API_KEY environment variable."
            ) from exc

        except RateLimitError as exc:
            logger.error("OpenAI RateLimitError: %s", exc)
            raise LlmError(f"OpenAI rate limit / quota error: {exc}") from exc

        except APITimeoutError as exc:
            raise LlmError("OpenAI request timed out.") from exc

        except LlmError:
            raise

        except Exception as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
