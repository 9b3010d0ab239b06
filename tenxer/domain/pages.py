from __future__ import annotations
from dataclasses import dataclass

from tenxer.domain.errors import NotFoundError
from tenxer.domain.models import Hotspot, ViewMode


@dataclass(frozen=True)
class Page:
    index: int
    view: ViewMode
    title: str
    hotspots: tuple[Hotspot, ...] = ()

    def find_hotspot(self, hotspot_id: str) -> Hotspot:
        for h in self.hotspots:
            if h.id == hotspot_id:
                return h
        raise NotFoundError("hotspot", hotspot_id)


def _snippet(n: int, label: str) -> str:
    return f"// Code for point {n} ({label})\nconsole.log('Point {n} activated');\n"


EDITOR_HOTSPOT = Hotspot(
    id="editor",
    x=0,
    y=0,
    label="Editor",
    payload="// You're in split mode. Start editing here.\n",
    visible=False,
)

_LANDING_HOTSPOTS: tuple[Hotspot, ...] = (
    Hotspot("point-1", 65, 40, "Ring Finger Motor", _snippet(1, "Ring Finger Motor")),
    Hotspot("point-2", 40, 55, "Thumb Actuator", _snippet(2, "Thumb Actuator")),
    Hotspot("point-3", 50, 50, "Palm Sensor Array", _snippet(3, "Palm Sensor Array")),
    Hotspot("point-4", 65, 50, "Wrist Rotation Module", _snippet(4, "Wrist Rotation Module")),
    EDITOR_HOTSPOT,
)

PAGES: tuple[Page, ...] = (
    Page(0, ViewMode.RUKA_HAND, "Ruka Hand"),
    Page(1, ViewMode.RUKA_HAND, "Ruka Hand"),
    Page(2, ViewMode.HAND_PREVIEW, "Amazing Hand"),
    Page(3, ViewMode.LANDING, "Amazing Hand", _LANDING_HOTSPOTS),
)

PAGE_COUNT = len(PAGES)
FIRST_PAGE = 0
LAST_PAGE = PAGE_COUNT - 1
PREVIEW_PAGE = 2
LANDING_PAGE = 3


def clamp_page(n: int) -> int:
    return max(FIRST_PAGE, min(LAST_PAGE, int(n)))


def page_at(n: int) -> Page:
    return PAGES[clamp_page(n)]
