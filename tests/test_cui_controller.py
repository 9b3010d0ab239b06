"""
Tests for tenxer/ui/cui_controller.py
The shell keeps taking clicks while a prompt is being classified.
"""
import asyncio
from dataclasses import dataclass, field

from tenxer.domain.models import ClassificationResult, CommandKind
from tenxer.ui.cui_controller import CUIController
from tenxer.usecases.navigation_service import STALE_RESPONSE, NavigationService
from tenxer.usecases.prompt_router import PromptRouter

from conftest import StubClassifier


@dataclass
class ScriptedController(CUIController):
    """Feeds input lines from a list; callables run before their line is returned."""

    script: list = field(default_factory=list)

    async def prompt(self) -> str:
        # let background prompt tasks make progress between lines
        for _ in range(5):
            await asyncio.sleep(0)
        step = self.script.pop(0)
        return step() if callable(step) else step


def _service(gate=None):
    result = ClassificationResult(kind=CommandKind.NAVIGATE, target="next", confidence=90,
                                  response_text="Next page.")
    stub = StubClassifier(result=result, gate=gate)
    return NavigationService(router=PromptRouter(classifier=stub)), stub


class TestRun:

    async def test_click_handled_while_prompt_pending(self, capsys):
        gate = asyncio.Event()
        service, stub = _service(gate)
        seen = {}

        def release():
            seen["page_while_pending"] = service.state.page_index
            seen["classify_calls"] = len(stub.classify_calls)
            gate.set()
            return "/state"

        controller = ScriptedController(service, script=["take me somewhere", "/dot 3", release, "/quit"])
        await controller.run(lambda cmd, args: None)

        assert seen == {"page_while_pending": 3, "classify_calls": 1}
        # the decision was made for page 0; the click moved the view first
        assert STALE_RESPONSE in capsys.readouterr().out
        assert service.state.page_index == 3

    async def test_prompt_reply_printed_when_done(self, capsys):
        service, _ = _service()
        controller = ScriptedController(service, script=["take me somewhere", "/state", "/quit"])
        await controller.run(lambda cmd, args: None)

        assert "assistant: Next page." in capsys.readouterr().out
        assert service.state.page_index == 1

    async def test_unfinished_prompt_cancelled_on_quit(self):
        gate = asyncio.Event()
        service, stub = _service(gate)
        controller = ScriptedController(service, script=["take me somewhere", "/quit"])
        await controller.run(lambda cmd, args: None)
        await asyncio.sleep(0)

        assert len(stub.classify_calls) == 1
        assert service.state.page_index == 0

    async def test_unknown_slash_command_goes_to_handler(self):
        service, _ = _service()
        calls = []
        controller = ScriptedController(service, script=["/config show", "/quit"])
        await controller.run(lambda cmd, args: calls.append((cmd, args)))
        assert calls == [("config", ["show"])]
