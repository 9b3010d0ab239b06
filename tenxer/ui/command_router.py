from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SlashCommand:
    name: str
    usage: str
    summary: str
    aliases: tuple[str, ...] = ()


COMMANDS: tuple[SlashCommand, ...] = (
    SlashCommand("dot", "/dot N", "jump to page N (slider dots)"),
    SlashCommand("click", "/click ID", "click a hotspot on the current page"),
    SlashCommand("next", "/next", "slider arrow right"),
    SlashCommand("prev", "/prev", "slider arrow left", aliases=("previous",)),
    SlashCommand("home", "/home", "toggle the live video"),
    SlashCommand("play", "/play", "start the video (background click)"),
    SlashCommand("close", "/close", "Exit button"),
    SlashCommand("back", "/back", "back arrow in video mode"),
    SlashCommand("state", "/state", "print the current navigation context"),
    SlashCommand("key", "/key KEY", "set the API key for this session (not saved)"),
    SlashCommand("config", "/config show | /config set KEY VALUE", "show or change settings"),
    SlashCommand("help", "/help", "this list"),
    SlashCommand("quit", "/quit", "leave", aliases=("q", "bye")),
)

_BY_NAME = {alias: c for c in COMMANDS for alias in (c.name, *c.aliases)}


@dataclass(frozen=True)
class RoutedInput:
    is_command: bool
    command: str | None = None
    args: list[str] | None = None
    text: str = ""


def usage(name: str) -> str:
    return "usage: " + _BY_NAME[name].usage


def help_lines() -> list[str]:
    return [f"{c.usage:<10} : {c.summary}" for c in COMMANDS]


def route(line: str) -> RoutedInput:
    raw = (line or "").strip()
    if not raw.startswith("/"):
        return RoutedInput(is_command=False, text=raw)

    parts = raw[1:].split()
    spec = _BY_NAME.get(parts[0].lower()) if parts else None
    # unknown slash words are still sent to the router as text
    if spec is None:
        return RoutedInput(is_command=False, text=raw)
    return RoutedInput(is_command=True, command=spec.name, args=parts[1:], text="")
