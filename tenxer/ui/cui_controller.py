from __future__ import annotations

import asyncio
from dataclasses import dataclass
import sys

from tenxer.domain import transitions as tr
from tenxer.domain.models import DispatchResult, ViewMode
from tenxer.domain.pages import PAGE_COUNT
from tenxer.ui.command_router import route, usage
from tenxer.usecases.navigation_service import NavigationService


@dataclass
class CUIController:
    navigation: NavigationService

    def info(self, msg: str) -> None:
        sys.stdout.write(f"[INFO] {msg}\n")
        sys.stdout.flush()

    def error(self, msg: str) -> None:
        sys.stdout.write(f"[ERROR] {msg}\n")
        sys.stdout.flush()

    def say_text(self, utterance: str) -> None:
        sys.stdout.write(f"assistant: {utterance}\n")
        sys.stdout.flush()

    async def prompt(self) -> str:
        try:
            return await asyncio.to_thread(input, "ask > ")
        except (EOFError, KeyboardInterrupt):
            return "/quit"

    def render(self) -> None:
        state = self.navigation.state
        page = self.navigation.page
        dots = " ".join("●" if i == state.page_index else "○" for i in range(PAGE_COUNT))
        lines = [f"TenXer | {page.title}   [{state.view.value}]   {dots}"]
        if state.view is ViewMode.VIDEO_ONLY:
            lines.append("  (live video playing)  /home to stop, /back for the first page")
        elif state.view is ViewMode.SPLIT:
            hotspot = tr.selected_hotspot(state)
            if hotspot is not None:
                lines.append(f"  -- {hotspot.label} --")
                lines.extend("  " + ln for ln in hotspot.payload.rstrip().splitlines())
        elif page.hotspots:
            for h in page.hotspots:
                if h.visible:
                    lines.append(f"  ({h.x:.0f}%, {h.y:.0f}%) {h.id}: {h.label}")
        sys.stdout.write("\n".join(lines) + "\n")
        sys.stdout.flush()

    def _click(self, result: DispatchResult) -> None:
        if not result.applied:
            self.error(result.response)
        self.render()

    def _handle_click(self, cmd: str, args: list[str]) -> bool:
        nav = self.navigation
        if cmd == "dot":
            if not args or not args[0].lstrip("-").isdigit():
                self.error(usage("dot"))
            else:
                self._click(nav.on_dot_clicked(int(args[0])))
            return True
        if cmd == "click":
            if not args:
                self.error(usage("click"))
            else:
                self._click(nav.on_hotspot_clicked(args[0]))
            return True
        handlers = {
            "next": nav.on_next,
            "prev": nav.on_previous,
            "home": nav.on_home_toggle,
            "close": nav.on_exit,
            "back": nav.on_back_from_video,
            "play": nav.on_background_clicked,
        }
        handler = handlers.get(cmd)
        if handler is None:
            return False
        self._click(handler())
        return True

    async def _answer(self, text: str) -> None:
        try:
            reply = await self.navigation.submit_prompt(text)
        except Exception as e:
            self.error(f"{type(e).__name__}: {e}")
            return
        self.say_text(reply)
        self.render()

    async def run(self, on_command) -> None:
        # prompts are answered in the background; clicks stay live meanwhile
        pending: set[asyncio.Task] = set()
        self.render()
        try:
            while True:
                line = await self.prompt()
                ri = route(line)
                if ri.is_command:
                    cmd = ri.command or ""
                    if cmd == "quit":
                        self.info("bye")
                        return
                    if cmd == "state":
                        self.info(str(self.navigation.context().to_dict()))
                        continue
                    if not self._handle_click(cmd, ri.args or []):
                        on_command(cmd, ri.args or [])
                    continue

                text = ri.text.strip()
                if not text:
                    continue

                task = asyncio.create_task(self._answer(text))
                pending.add(task)
                task.add_done_callback(pending.discard)
        finally:
            for task in pending:
                task.cancel()
