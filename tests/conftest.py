import sys
from pathlib import Path


_root = Path(__file__).resolve().parents[1]
_src = _root / "src"
if _src.exists() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

import pytest  # noqa: E402

from babysitter.models import SessionState  # noqa: E402
from babysitter.skill.controller import DialogController  # noqa: E402


@pytest.fixture
def controller() -> DialogController:
    """Controller with the default intent table."""
    return DialogController()


@pytest.fixture
def joke_attributes() -> dict:
    """Attributes as left by the joke source right after "Knock knock"."""
    return {
        "stage": 1,
        "setup": "Lettuce",
        "speechPunchline": "Lettuce in, it's cold out here!",
        "cardPunchline": "Lettuce in, it's cold out here!",
    }


@pytest.fixture
def make_session():
    """Factory for SessionState with a copy of the given attributes."""

    def _make(attributes: dict | None = None, session_id: str = "session-1") -> SessionState:
        return SessionState(session_id=session_id, attributes=dict(attributes or {}))

    return _make
