from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ViewMode(str, Enum):
    RUKA_HAND = "ruka-hand"
    HAND_PREVIEW = "hand-preview"
    LANDING = "landing"
    SPLIT = "split"
    VIDEO_ONLY = "video-only"


class CommandKind(str, Enum):
    NAVIGATE = "navigate"
    INTERACT = "interact"
    INFO = "info"


CONFIDENCE_THRESHOLD = 60


@dataclass(frozen=True)
class Hotspot:
    id: str
    x: float  # percentage from left
    y: float  # percentage from top
    label: str
    payload: str = ""
    visible: bool = True


@dataclass(frozen=True)
class ViewState:
    view: ViewMode = ViewMode.RUKA_HAND
    page_index: int = 0
    video_playing: bool = False
    selected_hotspot_id: str | None = None


@dataclass(frozen=True)
class NavigationContext:
    """Read-only snapshot handed to the classifier."""

    current_view: str
    current_index: int
    video_playing: bool
    selected_point: str | None

    @classmethod
    def from_state(cls, state: ViewState) -> "NavigationContext":
        return cls(
            current_view=state.view.value,
            current_index=state.page_index,
            video_playing=state.video_playing,
            selected_point=state.selected_hotspot_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentView": self.current_view,
            "currentIndex": self.current_index,
            "videoPlaying": self.video_playing,
            "selectedPoint": self.selected_point,
        }


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    target: str | None = None
    parameters: dict[str, Any] = field(default_factory=dict)
    response_text: str | None = None

    @classmethod
    def navigate(cls, target: str, response_text: str | None = None, **parameters: Any) -> "Command":
        return cls(CommandKind.NAVIGATE, target=target, parameters=parameters, response_text=response_text)

    @classmethod
    def interact(cls, target: str, response_text: str | None = None, **parameters: Any) -> "Command":
        return cls(CommandKind.INTERACT, target=target, parameters=parameters, response_text=response_text)

    @classmethod
    def info(cls, response_text: str) -> "Command":
        return cls(CommandKind.INFO, target="general", response_text=response_text)

    @property
    def actionable(self) -> bool:
        return self.kind is not CommandKind.INFO


@dataclass(frozen=True)
class ClassificationResult:
    kind: CommandKind
    target: str | None = None
    parameters: dict[str, Any] = field(default_factory=dict)
    confidence: int = 0
    rationale: str = ""
    response_text: str = ""

    @property
    def certain(self) -> bool:
        return self.confidence >= CONFIDENCE_THRESHOLD

    def to_command(self) -> Command:
        # uncertain or target-less results only carry their explanation
        if self.kind is CommandKind.INFO or not self.target or not self.certain:
            return Command.info(self.response_text)
        return Command(
            self.kind,
            target=self.target,
            parameters=dict(self.parameters),
            response_text=self.response_text or None,
        )


@dataclass(frozen=True)
class DispatchResult:
    state: ViewState
    response: str
    applied: bool = True
