from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any

from tenxer.domain import transitions as tr
from tenxer.domain.errors import NotFoundError
from tenxer.domain.models import Command, CommandKind, DispatchResult, ViewMode, ViewState
from tenxer.domain.pages import EDITOR_HOTSPOT, LANDING_PAGE, PREVIEW_PAGE

log = logging.getLogger("tenxer.dispatch")

_DOT_ALIAS = re.compile(r"^(?:(?:dot|point)-?)?(\d+)$")


def normalize_target(target: str | None) -> str:
    return re.sub(r"\s+", "-", (target or "").strip().lower())


def normalize_hotspot_id(target: str | None) -> str:
    t = normalize_target(target)
    m = _DOT_ALIAS.match(t)
    return f"point-{int(m.group(1))}" if m else t


def _int_param(params: dict[str, Any], key: str, default: int) -> int:
    raw = params.get(key, default)
    if isinstance(raw, bool) or (isinstance(raw, float) and not math.isfinite(raw)):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return default


@dataclass
class CommandDispatcher:
    """Applies Commands to a ViewState; every command source goes through here."""

    def dispatch(self, command: Command, state: ViewState) -> DispatchResult:
        if command.kind is CommandKind.INFO:
            return DispatchResult(state, command.response_text or "Information processed.", applied=False)

        try:
            if command.kind is CommandKind.NAVIGATE:
                new_state = self._navigate(normalize_target(command.target), command.parameters, state)
                default = f"Navigated to {command.target}"
            else:
                new_state = self._interact(normalize_hotspot_id(command.target), state)
                default = f"Interacted with {command.target}"
        except NotFoundError as e:
            log.info("rejected %s %r: %s", command.kind.value, command.target, e)
            return DispatchResult(state, self._diagnostic(command, e), applied=False)

        log.info("%s %s: %s -> %s", command.kind.value, command.target, state, new_state)
        return DispatchResult(new_state, command.response_text or default)

    def _navigate(self, target: str, params: dict[str, Any], state: ViewState) -> ViewState:
        if target == "ruka-hand":
            # 0 = first, 1 = second
            page = min(max(_int_param(params, "page", 0), 0), 1)
            return tr.goto_page(state, page)
        if target in ("amazing-hand", "amazing-hand-preview"):
            return tr.goto_page(state, PREVIEW_PAGE)
        if target in ("interactive-hand", "landing"):
            return tr.goto_page(state, LANDING_PAGE)
        if target == "page":
            return tr.goto_page(state, _int_param(params, "page", state.page_index))
        if target == "next":
            return tr.next_page(state)
        if target in ("previous", "back"):
            return tr.previous_page(state)
        if target in ("home", "video", "video-only", "live-video"):
            return tr.toggle_video(state)
        if target == "play-video":
            return tr.play_video(state)
        if target == "back-from-video":
            return tr.back_from_video(state)
        if target in ("split", "code", "editor"):
            point = params.get("point") or params.get("hotspot")
            if isinstance(point, dict):
                point = point.get("id")
            hotspot_id = normalize_hotspot_id(str(point)) if point else EDITOR_HOTSPOT.id
            base = state if state.page_index == LANDING_PAGE else tr.goto_page(state, LANDING_PAGE)
            return tr.enter_split(base, hotspot_id)
        if target == "exit":
            if state.view is ViewMode.SPLIT:
                return tr.exit_split(state)
            return tr.close_view(state)
        raise NotFoundError("navigation target", target)

    def _interact(self, hotspot_id: str, state: ViewState) -> ViewState:
        return tr.enter_split(state, hotspot_id)

    def _diagnostic(self, command: Command, err: NotFoundError) -> str:
        if err.what == "hotspot":
            m = _DOT_ALIAS.match(str(err.name))
            name = f"dot {m.group(1)}" if m else f"'{err.name}'"
            return f"There is no {name} on this page. Try 'go to interactive hand' first."
        return f"I don't know how to {command.kind.value} to '{command.target}'. Say 'help' for the command list."
