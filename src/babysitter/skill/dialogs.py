"""Greeting and child-management dialog.

The dialog is driven by `lastQuestion`, the question the user was last asked:

    (absent) --launch--> greeting
    greeting --yes--> edit-delete-add-child
    greeting --no-->  add-new-child

Yes/No from any other state is out of context: the user is asked the greeting
question again and `lastQuestion` goes back to `greeting`.
"""

from typing import Any, Mapping

from ..models import LAST_QUESTION, STAGE, DialogTurn, LastQuestion, with_attributes
from ..settings import get_settings
from .help import resolve_help, resolve_joke_help
from .responses import ask, ask_with_card, plain, tell

GREETING_TEXT = "Welcome to Babysitter. Have you already saved a child?"
YES_NO_REPROMPT = "Please say yes or no"
EDIT_DELETE_ADD_TEXT = "Would you like to edit, delete, or add a new child?"
EDIT_DELETE_ADD_REPROMPT = "Please say edit, delete, or new"
ADD_NEW_CHILD_TEXT = "Would you like to add a new child?"
OUT_OF_CONTEXT_TEXT = "Sorry, I lost track of where we were. Have you already saved a child?"
GOODBYE_TEXT = "Goodbye"


def _question(attributes: Mapping[str, Any], speech_text: str, reprompt_text: str, asked: LastQuestion) -> DialogTurn:
    response = ask_with_card(plain(speech_text), plain(reprompt_text), get_settings().skill_card_title, speech_text)
    return DialogTurn(response=response, attributes=with_attributes(attributes, **{LAST_QUESTION: asked.value}))


def greeting(attributes: Mapping[str, Any]) -> DialogTurn:
    """Open the conversation by asking whether a child has been saved."""
    return _question(attributes, GREETING_TEXT, YES_NO_REPROMPT, LastQuestion.GREETING)


def out_of_context(attributes: Mapping[str, Any]) -> DialogTurn:
    return _question(attributes, OUT_OF_CONTEXT_TEXT, YES_NO_REPROMPT, LastQuestion.GREETING)


def yes(attributes: Mapping[str, Any]) -> DialogTurn:
    """The user has already saved a child: offer to edit, delete or add."""
    if attributes.get(LAST_QUESTION) != LastQuestion.GREETING.value:
        return out_of_context(attributes)
    return _question(attributes, EDIT_DELETE_ADD_TEXT, EDIT_DELETE_ADD_REPROMPT, LastQuestion.EDIT_DELETE_ADD_CHILD)


def no(attributes: Mapping[str, Any]) -> DialogTurn:
    """No child saved yet: offer to add one."""
    if attributes.get(LAST_QUESTION) != LastQuestion.GREETING.value:
        return out_of_context(attributes)
    return _question(attributes, ADD_NEW_CHILD_TEXT, YES_NO_REPROMPT, LastQuestion.ADD_NEW_CHILD)


def help_(attributes: Mapping[str, Any]) -> DialogTurn:
    """Guidance for the question last asked, or for the joke when one is under way."""
    last_question = attributes.get(LAST_QUESTION)
    stage = attributes.get(STAGE)
    if last_question is None and stage is not None:
        text = resolve_joke_help(stage)
    else:
        text = resolve_help(last_question)
    # Reprompt repeats the guidance.
    return DialogTurn(response=ask(plain(text), plain(text)), attributes=dict(attributes))


def goodbye(attributes: Mapping[str, Any]) -> DialogTurn:
    return DialogTurn(response=tell(plain(GOODBYE_TEXT)), attributes=dict(attributes))
