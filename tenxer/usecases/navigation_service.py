from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tenxer.domain import transitions as tr
from tenxer.domain.models import Command, DispatchResult, NavigationContext, ViewState
from tenxer.domain.pages import Page, page_at
from tenxer.infra.intent_classifier import IntentClassifier
from tenxer.usecases.dispatcher import CommandDispatcher
from tenxer.usecases.prompt_router import PromptRouter

log = logging.getLogger("tenxer.session")

SUPERSEDED_RESPONSE = "A newer request replaced this one."
STALE_RESPONSE = "The view changed while I was thinking; please repeat the request."


@dataclass
class NavigationService:
    """Entry points used by the presentation layer.

    Holds the presentation-owned ViewState for one user session. Prompts are
    classified against an immutable snapshot; when overlapping submissions
    happen the last one wins, and a navigation decision computed for a view
    the user has already left is dropped.
    """

    router: PromptRouter
    dispatcher: CommandDispatcher = field(default_factory=CommandDispatcher)
    state: ViewState = field(default_factory=tr.initial_state)
    _revision: int = 0
    _submission: int = 0

    @property
    def page(self) -> Page:
        return page_at(self.state.page_index)

    def context(self) -> NavigationContext:
        return NavigationContext.from_state(self.state)

    def set_classifier(self, classifier: IntentClassifier | None) -> None:
        self.router.classifier = classifier

    @property
    def classifier_configured(self) -> bool:
        return self.router.classifier is not None

    async def submit_prompt(self, text: str) -> str:
        self._submission += 1
        ticket = self._submission
        revision = self._revision
        command = await self.router.route(text, NavigationContext.from_state(self.state))

        if ticket != self._submission:
            log.info("discarding superseded result for %r", text)
            return SUPERSEDED_RESPONSE
        if command.actionable and revision != self._revision:
            log.info("discarding stale %s %s for %r", command.kind.value, command.target, text)
            return STALE_RESPONSE
        return self.execute(command).response

    def execute(self, command: Command) -> DispatchResult:
        result = self.dispatcher.dispatch(command, self.state)
        if result.state != self.state:
            tr.check_invariants(result.state)
            self.state = result.state
            self._revision += 1
        return result

    def on_hotspot_clicked(self, hotspot_id: str) -> DispatchResult:
        return self.execute(Command.interact(hotspot_id))

    def on_dot_clicked(self, page_index: int) -> DispatchResult:
        return self.execute(Command.navigate("page", page=page_index))

    def on_exit(self) -> DispatchResult:
        return self.execute(Command.navigate("exit"))

    def on_home_toggle(self) -> DispatchResult:
        return self.execute(Command.navigate("home"))

    def on_next(self) -> DispatchResult:
        return self.execute(Command.navigate("next"))

    def on_previous(self) -> DispatchResult:
        return self.execute(Command.navigate("previous"))

    def on_background_clicked(self) -> DispatchResult:
        return self.execute(Command.navigate("play-video"))

    def on_back_from_video(self) -> DispatchResult:
        return self.execute(Command.navigate("back-from-video"))
