"""Navigation capability injected into the session components."""

from typing import Protocol


class NavigationPort(Protocol):
    """Lets the core ask its host to leave the current session."""

    def leave_session(self) -> None: ...


class RecordingNavigator:
    """Navigation port that only remembers that it was asked to leave."""

    def __init__(self) -> None:
        self.left = False

    def leave_session(self) -> None:
        self.left = True
