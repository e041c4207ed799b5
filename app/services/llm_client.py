"""Minimal chat-completions client - one operation, no retries."""

import httpx
import time
from typing import Optional
from app.config import get_settings, get_model
from app.logging_config import get_logger
from app.services.llm_metrics import LLMCallLogger

logger = get_logger('llm')


class LLMError(Exception):
    """Raised when the completion API is unreachable or returns non-2xx."""
    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"LLM error ({status}): {body}")


class LLMClient:
    """
    Client for an OpenAI-compatible chat completions endpoint.

    Encoding contract:
    POST {base_url}/chat/completions -> json={"model", "messages", "response_format"?}
    Reply text is read from choices[0].message.content.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.base_url = settings.openai_base_url.rstrip("/")
        self.model = get_model(settings)
        self.timeout = settings.llm_timeout_seconds
        self._transport = transport

        if not self.api_key:
            raise LLMError(0, "OPENAI_API_KEY not configured")

        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        response_format: Optional[dict] = None,
        caller_context: str = "unknown",
    ) -> str:
        """Send one system + user exchange. Returns the assistant message text.

        Blank messages raise LLMError(0) before any request is sent. This is a
        client-level guard; the chat route rejects them earlier with 400.
        """
        if not user_message or not user_message.strip():
            raise LLMError(0, "Message content cannot be empty")

        url = f"{self.base_url}/chat/completions"
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        }
        if response_format:
            payload["response_format"] = response_format

        prompt_chars = len(system_prompt) + len(user_message)
        start_time = time.time()

        logger.info(
            f"→ LLM_COMPLETE | caller={caller_context} | model={self.model} | "
            f"input_length={prompt_chars} chars | input_tokens_est={prompt_chars // 4}"
        )

        async with LLMCallLogger(
            model=self.model,
            prompt_chars=prompt_chars,
            caller_context=caller_context,
        ) as call:
            call.mark_send()
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                    resp = await client.post(url, headers=self.headers, json=payload)
            except httpx.HTTPError as e:
                duration = time.time() - start_time
                logger.error(f"✗ LLM_COMPLETE_UNREACHABLE | error={e!r} | duration={duration:.3f}s")
                call.set_error(type(e).__name__)
                raise LLMError(0, f"Connection failed: {e}") from e

            duration = time.time() - start_time

            if resp.status_code != 200:
                logger.error(
                    f"✗ LLM_COMPLETE_FAILED | status={resp.status_code} | error={resp.text[:200]} | duration={duration:.3f}s"
                )
                call.set_error(f"http_{resp.status_code}")
                raise LLMError(resp.status_code, resp.text)

            try:
                message = resp.json()["choices"][0]["message"]["content"]
            except (ValueError, KeyError, IndexError, TypeError):
                message = None
            if not message:
                logger.error(f"✗ LLM_COMPLETE_NO_CONTENT | body={resp.text[:200]} | duration={duration:.3f}s")
                call.set_error("no_content")
                raise LLMError(502, f"No content in response: {resp.text[:500]}")

            call.set_output(message)

        logger.info(
            f"✓ LLM_COMPLETE_SUCCESS | caller={caller_context} | output_length={len(message)} chars | "
            f"output_tokens_est={len(message) // 4} | duration={duration:.3f}s"
        )
        return message
