from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from tenxer.domain.errors import NavigationError
from tenxer.domain.intent_matcher import LocalIntentMatcher, normalize_prompt
from tenxer.domain.models import Command, NavigationContext
from tenxer.domain.prompt_builder import GENERAL_QA_DISABLED, HELP_TEXT
from tenxer.infra.intent_classifier import IntentClassifier

log = logging.getLogger("tenxer.router")

NAVIGATION_KEYWORDS: tuple[str, ...] = (
    "go to", "open", "show me", "navigate", "switch", "next", "back", "previous",
    "click", "page", "home", "exit", "close", "split", "editor",
)

INFORMATION_KEYWORDS: tuple[str, ...] = (
    "what is", "tell me about", "information about", "explain", "describe", "how does", "why",
)

_HELP_WORDS = {"help", "?", "commands", "what can you do"}


class Register(str, Enum):
    NAVIGATION = "navigation"
    INFORMATION = "information"
    UNKNOWN = "unknown"


def classify_register(prompt: str) -> Register:
    p = normalize_prompt(prompt)
    # information phrasing wins over incidental movement words
    if any(k in p for k in INFORMATION_KEYWORDS):
        return Register.INFORMATION
    if any(k in p for k in NAVIGATION_KEYWORDS):
        return Register.NAVIGATION
    return Register.UNKNOWN


@dataclass
class PromptRouter:
    classifier: IntentClassifier | None = None
    matcher: LocalIntentMatcher = field(default_factory=LocalIntentMatcher)
    general_answers_enabled: bool = True

    async def route(self, prompt: str, context: NavigationContext) -> Command:
        # local first: core navigation works with no network at all
        local = self.matcher.match(prompt)
        if local is not None:
            log.info("local match %r -> %s %s", prompt, local.kind.value, local.target)
            return local

        if normalize_prompt(prompt) in _HELP_WORDS:
            return Command.info(HELP_TEXT)

        if self.classifier is None:
            log.info("no classifier configured; help for %r", prompt)
            return Command.info(HELP_TEXT)

        register = classify_register(prompt)
        try:
            if register is Register.INFORMATION:
                if not self.general_answers_enabled:
                    return Command.info(GENERAL_QA_DISABLED)
                return Command.info(await self.classifier.general_answer(prompt))
            result = await self.classifier.classify(prompt, context)
            return result.to_command()
        except NavigationError as e:
            log.warning("classifier failed for %r (%s): %s", prompt, register.value, e)
        except Exception:
            log.exception("unexpected classifier error for %r", prompt)
        return Command.info(HELP_TEXT)
