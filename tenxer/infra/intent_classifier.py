from __future__ import annotations

import asyncio
import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Protocol

from tenxer.domain.errors import ClassifierUnavailableError, MalformedClassifierResponseError
from tenxer.domain.models import ClassificationResult, CommandKind, NavigationContext
from tenxer.domain.prompt_builder import PromptBuilder
from tenxer.infra.llm_client import LlmClient

log = logging.getLogger("tenxer.classifier")

MALFORMED_CONFIDENCE = 30
DEFAULT_CONFIDENCE = 50


class IntentClassifier(Protocol):
    """Narrow interface over the remote model so backends can be swapped."""

    async def classify(self, prompt: str, context: NavigationContext) -> ClassificationResult:
        ...

    async def general_answer(self, prompt: str) -> str:
        ...


def extract_json_object(text: str) -> str:
    """Return the first balanced {...} substring of text."""
    start = text.find("{")
    if start == -1:
        raise MalformedClassifierResponseError(text)
    depth = 0
    in_str = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    raise MalformedClassifierResponseError(text, "unbalanced JSON object in reply")


def _coerce_confidence(raw: Any) -> int:
    if isinstance(raw, bool):
        return DEFAULT_CONFIDENCE
    if isinstance(raw, str):
        try:
            raw = float(raw.strip().rstrip("%"))
        except ValueError:
            return DEFAULT_CONFIDENCE
    if isinstance(raw, (int, float)):
        # json.loads accepts NaN and Infinity
        if isinstance(raw, float) and not math.isfinite(raw):
            return DEFAULT_CONFIDENCE
        return max(0, min(100, int(raw)))
    return DEFAULT_CONFIDENCE


def _coerce_kind(raw: Any) -> CommandKind:
    try:
        return CommandKind(str(raw or "").strip().lower())
    except ValueError:
        return CommandKind.INFO


def parse_classification(raw: str) -> ClassificationResult:
    text = (raw or "").strip()
    try:
        data = json.loads(extract_json_object(text))
        if not isinstance(data, dict):
            raise MalformedClassifierResponseError(text, "JSON reply is not an object")
    except (MalformedClassifierResponseError, json.JSONDecodeError) as e:
        log.info("unparsable classifier reply (%s)", e)
        return ClassificationResult(
            kind=CommandKind.INFO,
            confidence=MALFORMED_CONFIDENCE,
            rationale="Failed to parse AI response as structured data",
            response_text=text or "I analyzed your request but couldn't determine a specific action.",
        )

    target = data.get("target")
    params = data.get("parameters")
    return ClassificationResult(
        kind=_coerce_kind(data.get("action")),
        target=str(target).strip() if target else None,
        parameters=params if isinstance(params, dict) else {},
        confidence=_coerce_confidence(data.get("confidence")),
        rationale=str(data.get("reasoning") or "AI analysis performed"),
        response_text=str(data.get("response") or text),
    )


@dataclass
class LlmIntentClassifier:
    client: LlmClient | None
    timeout_sec: float = 15.0
    prompt_builder: PromptBuilder = field(default_factory=PromptBuilder)

    async def _complete(self, system_prompt: str, user_text: str) -> str:
        if self.client is None:
            raise ClassifierUnavailableError("no API key configured")
        try:
            return await asyncio.wait_for(self.client.complete(system_prompt, user_text), self.timeout_sec)
        except asyncio.TimeoutError as e:
            raise ClassifierUnavailableError(f"timed out after {self.timeout_sec}s") from e
        except Exception as e:
            raise ClassifierUnavailableError(f"{type(e).__name__}: {e}") from e

    async def classify(self, prompt: str, context: NavigationContext) -> ClassificationResult:
        raw = await self._complete(
            self.prompt_builder.build_classifier_prompt(context),
            self.prompt_builder.build_user_message(prompt),
        )
        result = parse_classification(raw)
        log.info(
            "classified %r -> %s %s (confidence=%d)",
            prompt,
            result.kind.value,
            result.target,
            result.confidence,
        )
        return result

    async def general_answer(self, prompt: str) -> str:
        return await self._complete(self.prompt_builder.build_general_prompt(), prompt)
