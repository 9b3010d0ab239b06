"""Pure view-state transitions.

Every function takes the current ViewState and returns a new one. Illegal
requests raise NotFoundError before anything is built, so a caller either gets
a complete new state or keeps the old one.
"""
from __future__ import annotations

from tenxer.domain.errors import InvariantViolationError
from tenxer.domain.models import Hotspot, ViewMode, ViewState
from tenxer.domain.pages import (
    FIRST_PAGE,
    LANDING_PAGE,
    LAST_PAGE,
    PREVIEW_PAGE,
    clamp_page,
    page_at,
)


def initial_state() -> ViewState:
    return goto_page(ViewState(), FIRST_PAGE)


def goto_page(state: ViewState, n: int) -> ViewState:
    page = page_at(clamp_page(n))
    selected = state.selected_hotspot_id if page.view is ViewMode.SPLIT else None
    return ViewState(view=page.view, page_index=page.index, video_playing=False, selected_hotspot_id=selected)


def next_page(state: ViewState) -> ViewState:
    if state.page_index >= LAST_PAGE:
        return state
    return goto_page(state, state.page_index + 1)


def previous_page(state: ViewState) -> ViewState:
    if state.page_index <= FIRST_PAGE:
        return state
    return goto_page(state, state.page_index - 1)


def selected_hotspot(state: ViewState) -> Hotspot | None:
    if state.selected_hotspot_id is None:
        return None
    return page_at(state.page_index).find_hotspot(state.selected_hotspot_id)


def enter_split(state: ViewState, hotspot_id: str) -> ViewState:
    page_at(state.page_index).find_hotspot(hotspot_id)
    return ViewState(
        view=ViewMode.SPLIT,
        page_index=state.page_index,
        video_playing=False,
        selected_hotspot_id=hotspot_id,
    )


def exit_split(state: ViewState) -> ViewState:
    _ = state
    return ViewState(view=ViewMode.LANDING, page_index=LANDING_PAGE)


def toggle_video(state: ViewState) -> ViewState:
    if state.video_playing:
        return ViewState(view=ViewMode.LANDING, page_index=LANDING_PAGE)
    return ViewState(view=ViewMode.VIDEO_ONLY, page_index=state.page_index, video_playing=True)


def play_video(state: ViewState) -> ViewState:
    if state.video_playing:
        return state
    return toggle_video(state)


def back_from_video(state: ViewState) -> ViewState:
    return goto_page(state, FIRST_PAGE)


def close_view(state: ViewState) -> ViewState:
    # Exit button outside split mode: stop video, back to the preview page
    return goto_page(state, PREVIEW_PAGE)


def check_invariants(state: ViewState) -> None:
    if (state.view is ViewMode.SPLIT) != (state.selected_hotspot_id is not None):
        raise InvariantViolationError(f"split/selection mismatch: {state}")
    if not FIRST_PAGE <= state.page_index <= LAST_PAGE:
        raise InvariantViolationError(f"page index out of range: {state}")
    if state.video_playing and state.view is not ViewMode.VIDEO_ONLY:
        raise InvariantViolationError(f"video playing outside video view: {state}")
