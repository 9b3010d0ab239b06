from __future__ import annotations


class NavigationError(Exception):
    """Base class for recoverable navigation-core errors."""


class NotFoundError(NavigationError):
    """Transition target (page, hotspot, navigate target) does not exist."""

    def __init__(self, what: str, name: object):
        super().__init__(f"{what} not found: {name}")
        self.what = what
        self.name = name


class ClassifierUnavailableError(NavigationError):
    """No credential, network failure or timeout talking to the model."""


class MalformedClassifierResponseError(NavigationError):
    def __init__(self, raw: str, reason: str = "no JSON object in reply"):
        super().__init__(reason)
        self.raw = raw


class InvariantViolationError(NavigationError):
    """A transition produced a ViewState that breaks the view rules."""
