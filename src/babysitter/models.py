from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping

LAST_QUESTION = "lastQuestion"
STAGE = "stage"
SETUP = "setup"
SPEECH_PUNCHLINE = "speechPunchline"
CARD_PUNCHLINE = "cardPunchline"


class LastQuestion(str, Enum):
    """Values the child-management dialog stores under `lastQuestion`."""

    GREETING = "greeting"
    EDIT_DELETE_ADD_CHILD = "edit-delete-add-child"
    ADD_NEW_CHILD = "add-new-child"


class SpeechKind(str, Enum):
    PLAIN_TEXT = "PlainText"
    SSML = "SSML"


@dataclass(frozen=True)
class OutputSpeech:
    """Spoken text plus how the voice platform should render it."""

    text: str
    kind: SpeechKind = SpeechKind.PLAIN_TEXT


@dataclass(frozen=True)
class Card:
    """Simple card shown in the companion app."""

    title: str
    content: str


@dataclass(frozen=True)
class SkillResponse:
    """Speech, optional reprompt and card, and whether the session ends."""

    speech: OutputSpeech | None = None
    reprompt: OutputSpeech | None = None
    card: Card | None = None
    should_end_session: bool = True


@dataclass(frozen=True)
class DialogTurn:
    """Outcome of one turn: the response and the attributes to carry forward."""

    response: SkillResponse
    attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SessionState:
    """Per-session state handed in by the hosting platform on every request."""

    session_id: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    new: bool = False
    application_id: str = ""


def with_attributes(attributes: Mapping[str, Any], **changes: Any) -> Dict[str, Any]:
    """Return a copy of `attributes` with `changes` applied; the input is left untouched."""
    updated = dict(attributes)
    updated.update(changes)
    return updated
