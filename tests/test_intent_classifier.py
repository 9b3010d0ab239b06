"""
Tests for tenxer/infra/intent_classifier.py
Reply parsing, confidence threshold and failure mapping.
"""
import asyncio

import pytest

from tenxer.domain.errors import ClassifierUnavailableError, MalformedClassifierResponseError
from tenxer.domain.models import ClassificationResult, CommandKind, NavigationContext, ViewState
from tenxer.infra.intent_classifier import LlmIntentClassifier, extract_json_object, parse_classification


class FakeLlm:
    def __init__(self, reply="", error=None, delay=0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls = []

    async def complete(self, system_prompt, user_text):
        self.calls.append((system_prompt, user_text))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


CONTEXT = NavigationContext.from_state(ViewState())


class TestExtractJson:

    def test_first_balanced_object(self):
        text = 'Sure! {"action": "navigate", "parameters": {"page": 1}} and {"other": 1}'
        assert extract_json_object(text) == '{"action": "navigate", "parameters": {"page": 1}}'

    def test_braces_inside_strings(self):
        text = '```json\n{"response": "use {curly} braces", "confidence": 80}\n```'
        assert extract_json_object(text) == '{"response": "use {curly} braces", "confidence": 80}'

    @pytest.mark.parametrize("text", ["no json here", '{"open": "never closed"'])
    def test_malformed(self, text):
        with pytest.raises(MalformedClassifierResponseError):
            extract_json_object(text)


class TestParseClassification:

    def test_full_reply(self):
        raw = ('{"action": "navigate", "target": "ruka-hand", "parameters": {"page": 1}, '
               '"confidence": 92, "reasoning": "explicit", "response": "Opening Ruka Hand"}')
        result = parse_classification(raw)
        assert result.kind is CommandKind.NAVIGATE
        assert result.target == "ruka-hand"
        assert result.parameters == {"page": 1}
        assert result.confidence == 92
        assert result.rationale == "explicit"
        assert result.response_text == "Opening Ruka Hand"

    def test_unparsable_degrades_to_info(self):
        result = parse_classification("I think you want the hand page")
        assert result.kind is CommandKind.INFO
        assert result.confidence == 30
        assert result.response_text == "I think you want the hand page"

    def test_invalid_json_degrades(self):
        assert parse_classification('{"a": [1, 2}').confidence == 30

    def test_unknown_action_is_info(self):
        assert parse_classification('{"action": "dance", "confidence": 99}').kind is CommandKind.INFO

    @pytest.mark.parametrize("raw_conf, expected", [
        ("150", 100), (-4, 0), ('"75%"', 75), ('"high"', 50),
        ("NaN", 50), ("Infinity", 50), ("1e999", 50), ('"-inf"', 50),
    ])
    def test_confidence_coercion(self, raw_conf, expected):
        raw = '{"action": "info", "confidence": %s}' % raw_conf
        assert parse_classification(raw).confidence == expected

    def test_missing_confidence_defaults(self):
        assert parse_classification('{"action": "navigate", "target": "next"}').confidence == 50


class TestThreshold:

    def test_low_confidence_reduces_to_info(self):
        for kind in (CommandKind.NAVIGATE, CommandKind.INTERACT):
            result = ClassificationResult(kind=kind, target="next", confidence=45, response_text="maybe next?")
            cmd = result.to_command()
            assert cmd.kind is CommandKind.INFO
            assert cmd.response_text == "maybe next?"

    def test_threshold_is_inclusive(self):
        result = ClassificationResult(kind=CommandKind.NAVIGATE, target="next", confidence=60)
        assert result.to_command().kind is CommandKind.NAVIGATE

    def test_missing_target_is_info(self):
        result = ClassificationResult(kind=CommandKind.INTERACT, confidence=99, response_text="which dot?")
        assert result.to_command().kind is CommandKind.INFO


class TestLlmIntentClassifier:

    async def test_classify_sends_context(self):
        llm = FakeLlm('{"action": "interact", "target": "point-2", "confidence": 88, "response": "ok"}')
        result = await LlmIntentClassifier(client=llm).classify("tap the thumb", CONTEXT)
        assert result.kind is CommandKind.INTERACT
        system_prompt, user_text = llm.calls[0]
        assert '"currentView": "ruka-hand"' in system_prompt
        assert "tap the thumb" in user_text

    async def test_general_answer(self):
        llm = FakeLlm("A robotic hand is a machine.")
        answer = await LlmIntentClassifier(client=llm).general_answer("what is a robotic hand")
        assert answer == "A robotic hand is a machine."

    async def test_no_client_is_unavailable(self):
        with pytest.raises(ClassifierUnavailableError):
            await LlmIntentClassifier(client=None).classify("anything", CONTEXT)

    async def test_backend_error_is_unavailable(self):
        classifier = LlmIntentClassifier(client=FakeLlm(error=RuntimeError("401 Unauthorized")))
        with pytest.raises(ClassifierUnavailableError):
            await classifier.general_answer("hi")

    async def test_timeout_is_unavailable(self):
        classifier = LlmIntentClassifier(client=FakeLlm(reply="{}", delay=1.0), timeout_sec=0.01)
        with pytest.raises(ClassifierUnavailableError):
            await classifier.classify("anything", CONTEXT)
