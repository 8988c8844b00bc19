"""Assistant reply generation with a scripted fallback"""

import asyncio
import logging
import random
from typing import Any, Dict, List

from business_ledger.config import settings
from business_ledger.domain.assistant import FALLBACK_PREFIX, scripted_reply
from business_ledger.domain.exceptions import AssistantUnavailable
from business_ledger.domain.models import AssistantReply
from business_ledger.infrastructure.clients.completions import CompletionClient
from business_ledger.infrastructure.observability.metrics import record_reply

SIMULATED = "simulated"
OPENAI = "openai"
FALLBACK = "fallback-simulated"


class AssistantService:
    """
    Answers questions about the business.

    Modes:
    - simulated: AI_MODE=simulated or no API key; scripted reply after an
      artificial delay
    - openai: remote chat completion
    - fallback-simulated: remote call failed; scripted reply prefixed with
      an apology. Remote failures never reach the caller.
    """

    def __init__(
        self,
        client: CompletionClient | None = None,
        mode: str | None = None,
        delay_seconds: float | None = None,
        rng: random.Random | None = None,
    ):
        self.client = client or CompletionClient()
        self.mode = mode or settings.ai_mode
        self.delay_seconds = settings.simulated_reply_delay_seconds if delay_seconds is None else delay_seconds
        self.rng = rng

    @property
    def live(self) -> bool:
        return self.mode != SIMULATED and bool(self.client.api_key)

    async def generate_reply(self, messages: List[Dict[str, Any]], context: Dict[str, Any]) -> AssistantReply:
        context = context or {}

        if not self.live:
            if self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)
            result = AssistantReply(reply=scripted_reply(context, self.rng), mode=SIMULATED)
        else:
            try:
                text = await self.client.complete(messages, context)
                result = AssistantReply(reply=text, mode=OPENAI)
            except AssistantUnavailable as e:
                logging.warning(f"Assistant unavailable, using scripted reply: {e}")
                result = AssistantReply(reply=FALLBACK_PREFIX + scripted_reply(context, self.rng), mode=FALLBACK)

        record_reply(result.mode)
        return result
