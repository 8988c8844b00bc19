"""Chat-completions HTTP client for live assistant replies"""

import json
import httpx
from typing import Any, Dict, List
from business_ledger.domain.exceptions import AssistantUnavailable
from business_ledger.config import settings
from business_ledger.infrastructure.observability.metrics import assistant_latency_histogram

SYSTEM_PROMPT = (
    "You are a helpful business assistant for a small business.\n"
    "Context: {context}.\n"
    "Keep answers concise and practical."
)


class CompletionClient:
    """Client for an OpenAI-compatible chat-completions endpoint"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.model = model or settings.openai_model
        self.timeout = timeout or settings.http_timeout_seconds

    def build_messages(self, messages: List[Dict[str, Any]], context: Dict[str, Any]) -> List[Dict[str, Any]]:
        """System prompt carrying the business context, then the conversation"""
        system = {"role": "system", "content": SYSTEM_PROMPT.format(context=json.dumps(context, default=str))}
        return [system, *messages]

    async def complete(self, messages: List[Dict[str, Any]], context: Dict[str, Any]) -> str:
        """
        Request a single reply for the conversation.

        Raises:
            AssistantUnavailable: On timeout, HTTP errors, an error body, or
                a response without a usable reply
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                with assistant_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/chat/completions",
                        headers={"Authorization": f"Bearer {self.api_key}"},
                        json={"model": self.model, "messages": self.build_messages(messages, context)},
                    )
                data = response.json()

                if isinstance(data, dict) and data.get("error"):
                    error = data["error"]
                    message = error.get("message") if isinstance(error, dict) else error
                    raise AssistantUnavailable(f"Completion API error: {message}")

                response.raise_for_status()
                return data["choices"][0]["message"]["content"]

            except httpx.TimeoutException as e:
                raise AssistantUnavailable(f"Completion API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise AssistantUnavailable(f"Completion API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AssistantUnavailable(f"Completion API unreachable: {e}") from e
            except (KeyError, IndexError, TypeError, ValueError) as e:
                raise AssistantUnavailable(f"Invalid completion response: {e}") from e
