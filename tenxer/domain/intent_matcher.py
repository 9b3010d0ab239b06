"""
Local intent matcher: deterministic keyword classifier for prompts.

Recognizes the navigation vocabulary WITHOUT calling the model. Rules are
tried in a fixed order and the first hit wins:

  1. hotspot reference   "dot 2", "point 3"        -> interact point-<n>
  2. direction           back / previous / next    -> navigate previous|next
  3. page name + verb    "go to ruka hand second"  -> navigate ruka-hand / amazing-hand / interactive-hand
  4. video / home        "play video", "home"      -> navigate home
  5. editing             split / code / editor     -> navigate split
  6. exit / close                                  -> navigate exit

All patterns match whole words, so "preview" is never read as "prev".
"""

from __future__ import annotations

import re

from tenxer.domain.models import Command


def normalize_prompt(text: str) -> str:
    return " ".join((text or "").lower().split())


# ═══════════════════════════════════════════════════════════════════
# Vocabulary
# ═══════════════════════════════════════════════════════════════════

_HOTSPOT = re.compile(r"\b(?:dot|point)\s*(\d+)")

_PREVIOUS = re.compile(r"\b(?:back|previous|prev)\b")
_NEXT = re.compile(r"\b(?:next|forward)\b")

# page names only count together with one of these verbs
_NAV_VERB = re.compile(r"\b(?:go|open|show|navigate)\b")

_RUKA = re.compile(r"\bruk{1,2}a\b")
_FIRST = re.compile(r"\b(?:first|one|1)\b")
_SECOND = re.compile(r"\b(?:second|two|2)\b")
_AMAZING = re.compile(r"\b(?:amazing|preview)\b")
_INTERACTIVE = re.compile(r"\b(?:interactive|landing|dots)\b")

_HOME = re.compile(r"\b(?:home|video|demo)\b")
_SPLIT = re.compile(r"\b(?:split|code|editor|edit)\b")
_EXIT = re.compile(r"\b(?:exit|close)\b")


def _ruka_page(p: str) -> int:
    if _FIRST.search(p):
        return 0
    if _SECOND.search(p):
        return 1
    return 0


def match(prompt: str) -> Command | None:
    """Map a prompt to a Command, or None when nothing local applies."""
    p = normalize_prompt(prompt)
    if not p:
        return None

    m = _HOTSPOT.search(p)
    if m:
        n = int(m.group(1))
        return Command.interact(f"point-{n}", f"Interacting with dot {n}.")

    if _PREVIOUS.search(p):
        return Command.navigate("previous", "Going back to previous page.")
    if _NEXT.search(p):
        return Command.navigate("next", "Moving to next page.")

    if _NAV_VERB.search(p):
        if _RUKA.search(p):
            page = _ruka_page(p)
            which = "first" if page == 0 else "second"
            return Command.navigate("ruka-hand", f"Opening Ruka Hand {which} page.", page=page)
        if _AMAZING.search(p):
            return Command.navigate("amazing-hand", "Opening Amazing Hand.")
        if _INTERACTIVE.search(p):
            return Command.navigate("interactive-hand", "Opening Interactive Hand.")

    if _HOME.search(p):
        return Command.navigate("home", "Opening video.")
    if _SPLIT.search(p):
        return Command.navigate("split", "Opening split view with code.")
    if _EXIT.search(p):
        return Command.navigate("exit", "Exiting.")

    return None


class LocalIntentMatcher:
    """Object form of match() for injection into the router."""

    def match(self, prompt: str) -> Command | None:
        return match(prompt)
