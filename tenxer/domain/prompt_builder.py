from __future__ import annotations

import json
from dataclasses import dataclass

from tenxer.domain.models import NavigationContext
from tenxer.domain.pages import PAGES

# target -> description, shared by the classifier prompt and the tool schema
NAVIGATION_TARGETS: dict[str, str] = {
    "ruka-hand": "Ruka Hand image (page 0 or 1 via parameters.page)",
    "amazing-hand": "Amazing Hand preview image (page 2)",
    "interactive-hand": "Interactive hand with clickable dots (page 3)",
    "split": "Split mode: hand + code editor",
    "next": "Move to next page",
    "previous": "Move to previous page",
    "home": "Toggle video mode",
    "exit": "Exit current view",
}

# phrasing examples; same grammar as the local matcher
_EXAMPLES: list[tuple[str, str]] = [
    ('"show ruka hand", "go to ruka", "first page"', 'navigate "ruka-hand" with parameters.page=0'),
    ('"go to ruka second", "ruka hand second page"', 'navigate "ruka-hand" with parameters.page=1'),
    ('"amazing hand", "open preview", "page 2"', 'navigate "amazing-hand"'),
    ('"interactive", "dots", "landing", "page 3"', 'navigate "interactive-hand"'),
    ('"play video", "demo", "home", "open live video"', 'navigate "home"'),
    ('"open code", "split mode", "editor", "how to edit"', 'navigate "split"'),
    ('"next", "forward", "go forward"', 'navigate "next"'),
    ('"back", "previous", "go back"', 'navigate "previous"'),
    ('"exit", "close"', 'navigate "exit"'),
    ('"click dot 1", "point 2", "select point 3"', 'interact with "point-<n>"'),
    ("questions about robotics, hands, technology", "info with a helpful response"),
]

HELP_TEXT = "\n".join(
    [
        "TenXer Interface Navigation Commands:",
        "",
        "BASIC NAVIGATION:",
        '- "go to ruka hand" / "go to ruka hand second page" - Ruka Hand pages',
        '- "go to amazing hand" - Amazing Hand preview',
        '- "go to interactive hand" - interactive hand with dots',
        '- "next page" / "previous page" - move between pages',
        '- "home" / "play video" - toggle video mode',
        '- "open split" / "open code" - hand + code editor',
        '- "exit" - leave the current view',
        "",
        "INTERACTION:",
        '- "click dot [number]" - select a dot on the interactive hand',
    ]
)

GENERAL_QA_DISABLED = (
    "General Q&A is disabled for this demo. Use navigation commands like "
    "'go to ruka hand', 'next page', 'open split', 'home', or 'click dot 1'."
)


def _page_legend() -> str:
    labels = []
    for p in PAGES:
        label = f"{p.index}={p.title}"
        if p.hotspots:
            label += " with dots"
        labels.append(label)
    return ", ".join(labels)


@dataclass
class PromptBuilder:
    def build_classifier_prompt(self, context: NavigationContext) -> str:
        parts: list[str] = []
        parts.append("You are an intelligent navigation assistant for a robotic hand interface called TenXer.")

        parts.append("")
        parts.append("CURRENT CONTEXT:")
        parts.append(f"- Current view: {context.current_view}")
        parts.append(f"- Current page index: {context.current_index} ({_page_legend()})")
        parts.append(f"- Video playing: {str(context.video_playing).lower()}")
        parts.append(f"- Selected point: {context.selected_point or 'none'}")
        parts.append(f"- Context JSON: {json.dumps(context.to_dict(), ensure_ascii=False)}")

        parts.append("")
        parts.append("AVAILABLE NAVIGATION TARGETS:")
        for target, desc in NAVIGATION_TARGETS.items():
            parts.append(f'- "{target}": {desc}')

        parts.append("")
        parts.append("INTERACTION TARGETS:")
        parts.append('- "point-1", "point-2", ...: click a specific dot on the interactive hand')

        parts.append("")
        parts.append("Map the different ways people say the same thing:")
        for phrases, outcome in _EXAMPLES:
            parts.append(f"- {phrases} -> {outcome}")

        parts.append("")
        parts.append("Determine the ACTION (navigate, interact or info), the TARGET, your CONFIDENCE (0-100),")
        parts.append("your REASONING and a short RESPONSE for the user.")
        parts.append("Return ONLY valid JSON with this exact structure:")
        parts.append(
            '{"action": "navigate", "target": "ruka-hand", "parameters": {"page": 0}, '
            '"confidence": 95, "reasoning": "User wants the ruka hand page", '
            '"response": "Navigating to the Ruka Hand page"}'
        )
        return "\n".join(parts).strip()

    def build_user_message(self, prompt: str) -> str:
        return f'Analyze this user prompt: "{prompt}"'

    def build_general_prompt(self) -> str:
        return "\n".join(
            [
                "You are an AI assistant for a robotic hand interface called TenXer. You can help with:",
                "1. Information about robotic hands, technology, and automation",
                "2. General questions about the interface",
                "3. Technical explanations",
                "",
                "Keep responses concise and helpful. If the user asks about navigation, guide them on these commands:",
                HELP_TEXT,
            ]
        )
