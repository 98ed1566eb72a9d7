"""Knock-knock joke dialog.

`stage` tracks the joke independently of the child-management dialog:

    1  "Knock knock" has been said, waiting for "who's there?"
    2  the setup has been said, waiting for "<setup> who?"

The joke text (`setup`, `speechPunchline`, `cardPunchline`) is expected in the
session attributes together with `stage`. A missing stage, setup or punchline
means the joke could not be retrieved, so the user is told how to start over.
"""

from typing import Any, Mapping

from ..models import CARD_PUNCHLINE, SETUP, SPEECH_PUNCHLINE, STAGE, DialogTurn, with_attributes
from ..settings import get_settings
from .responses import ask, ask_with_card, plain, ssml, tell_with_card

STAGE_KNOCK_KNOCK = 1
STAGE_SETUP = 2

RETRIEVE_FAILED_TEXT = "Sorry, I couldn't correctly retrieve the joke. You can say, tell me a joke"
RESTART_REPROMPT = "You can say, tell me a joke"
WRONG_TURN_TEXT = "That's not how knock knock jokes work!"
PAUSE = '<break time="0.3s" />'


def _stage(attributes: Mapping[str, Any]) -> int | None:
    return attributes.get(STAGE)


def _text(attributes: Mapping[str, Any], key: str) -> str | None:
    """Joke text stored under `key`, or None when it is missing or blank."""
    value = attributes.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def _cannot_retrieve(attributes: Mapping[str, Any]) -> DialogTurn:
    response = ask(ssml(RETRIEVE_FAILED_TEXT), ssml(RESTART_REPROMPT))
    return DialogTurn(response=response, attributes=dict(attributes))


def _cannot_retrieve_with_card(attributes: Mapping[str, Any]) -> DialogTurn:
    response = ask_with_card(
        plain(RETRIEVE_FAILED_TEXT),
        plain(RESTART_REPROMPT),
        get_settings().joke_card_title,
        RETRIEVE_FAILED_TEXT,
    )
    return DialogTurn(response=response, attributes=dict(attributes))


def whos_there(attributes: Mapping[str, Any]) -> DialogTurn:
    """Answer "who's there?" with the setup, or restart a joke told out of order."""
    stage = _stage(attributes)
    if stage is None:
        return _cannot_retrieve(attributes)

    if stage == STAGE_KNOCK_KNOCK:
        setup = _text(attributes, SETUP)
        if setup is None:
            return _cannot_retrieve(attributes)
        response = ask(ssml(setup), ssml(f"You can ask, {setup} who?"))
        return DialogTurn(response=response, attributes=with_attributes(attributes, **{STAGE: STAGE_SETUP}))

    response = ask(
        ssml(f"{WRONG_TURN_TEXT} {PAUSE} knock knock"),
        ssml("You can ask, who's there."),
    )
    return DialogTurn(response=response, attributes=with_attributes(attributes, **{STAGE: STAGE_KNOCK_KNOCK}))


def setup_name_who(attributes: Mapping[str, Any]) -> DialogTurn:
    """Deliver the punchline after "<setup> who?" and end the session."""
    stage = _stage(attributes)
    if stage is None:
        return _cannot_retrieve_with_card(attributes)

    if stage == STAGE_SETUP:
        punchline = _text(attributes, SPEECH_PUNCHLINE)
        if punchline is None:
            return _cannot_retrieve_with_card(attributes)
        response = tell_with_card(
            ssml(punchline),
            get_settings().joke_card_title,
            _text(attributes, CARD_PUNCHLINE) or punchline,
        )
        return DialogTurn(response=response, attributes=dict(attributes))

    # Out of order: start the joke again from "knock knock".
    response = ask_with_card(
        ssml(f"{WRONG_TURN_TEXT} {PAUSE} Knock knock!"),
        plain("You can ask who's there."),
        get_settings().joke_card_title,
        f"{WRONG_TURN_TEXT} Knock knock!",
    )
    return DialogTurn(response=response, attributes=with_attributes(attributes, **{STAGE: STAGE_KNOCK_KNOCK}))
