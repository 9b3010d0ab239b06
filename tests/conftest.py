"""
Shared fixtures for the navigation-core tests.

StubClassifier implements the narrow classifier interface (classify /
general_answer) so no test touches the network.
"""
from __future__ import annotations

import asyncio

import pytest

from tenxer.domain.errors import ClassifierUnavailableError
from tenxer.domain.models import ClassificationResult, CommandKind, NavigationContext
from tenxer.usecases.navigation_service import NavigationService
from tenxer.usecases.prompt_router import PromptRouter


class StubClassifier:
    def __init__(self, result: ClassificationResult | None = None, answer: str = "stub answer",
                 error: Exception | None = None, gate: asyncio.Event | None = None):
        self.result = result or ClassificationResult(kind=CommandKind.INFO, confidence=0, response_text="")
        self.answer = answer
        self.error = error
        self.gate = gate
        self.classify_calls: list[tuple[str, NavigationContext]] = []
        self.answer_calls: list[str] = []

    async def classify(self, prompt, context):
        self.classify_calls.append((prompt, context))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result

    async def general_answer(self, prompt):
        self.answer_calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def stub_classifier():
    return StubClassifier()


@pytest.fixture
def failing_classifier():
    return StubClassifier(error=ClassifierUnavailableError("network down"))


@pytest.fixture
def local_only_service():
    return NavigationService(router=PromptRouter(classifier=None))
