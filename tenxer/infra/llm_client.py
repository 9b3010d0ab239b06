from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential


@dataclass(frozen=True)
class LlmClientConfig:
    base_url: str
    model: str
    api_key: str
    timeout_sec: float
    retry_max: int
    temperature: float
    max_tokens: int


class LlmClient:
    """OpenAI-compatible chat endpoint (Gemini by default)."""

    def __init__(self, cfg: LlmClientConfig):
        self.retry_max = cfg.retry_max
        llm_kwargs: dict[str, object] = {
            "base_url": cfg.base_url,
            "api_key": cfg.api_key,
            "model": cfg.model,
            "timeout": cfg.timeout_sec,
            "temperature": cfg.temperature,
            "max_retries": 0,
        }
        if cfg.max_tokens > 0:
            llm_kwargs["max_tokens"] = cfg.max_tokens
        self.llm = ChatOpenAI(**llm_kwargs)

    async def _ainvoke(self, msgs: list[Any]) -> str:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max(1, self.retry_max)),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(Exception),
            reraise=True,
        ):
            with attempt:
                resp = await self.llm.ainvoke(msgs)
                return str(resp.content or "").strip()
        return ""

    async def complete(self, system_prompt: str, user_text: str) -> str:
        msgs = [SystemMessage(content=system_prompt), HumanMessage(content=user_text)]
        return await self._ainvoke(msgs)
