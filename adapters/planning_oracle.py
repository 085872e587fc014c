"""Anthropic-backed completion used to draft meal plans."""

import logging
from typing import Optional

import anthropic

logger = logging.getLogger("dinnerplan.oracle")


class AnthropicPlanningOracle:
    """Sends one user prompt to Claude and returns the raw text reply."""

    def __init__(self, api_key: str, model: str, max_tokens: int = 2000, client: Optional[anthropic.Anthropic] = None):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self._client = client

    @property
    def client(self) -> anthropic.Anthropic:
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("Anthropic API key not configured")
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def complete(self, prompt: str) -> str:
        logger.info("Requesting meal plan from %s (%d prompt chars)", self.model, len(prompt))
        message = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        text_blocks = [block.text for block in message.content if getattr(block, "type", None) == "text"]
        return "".join(text_blocks).strip()
