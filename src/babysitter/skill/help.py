from typing import Any, Dict

from ..models import LastQuestion

GREETING_HELP = (
    "Babysitter keeps track of the children you look after. "
    "If you have already saved a child, say yes. Otherwise say no, or you can say exit."
)

HELP_TEXTS: Dict[str, str] = {
    LastQuestion.GREETING.value: GREETING_HELP,
    LastQuestion.EDIT_DELETE_ADD_CHILD.value: (
        "You can say edit or delete to change a saved child, "
        "or say new to add another child. You can also say exit."
    ),
    LastQuestion.ADD_NEW_CHILD.value: (
        "Say yes to add a new child, or say no if you don't want to. You can also say exit."
    ),
}


def resolve_help(last_question: Any) -> str:
    """Return the guidance text for the question the user was last asked.

    Unknown or missing questions get the greeting help.
    """
    if not isinstance(last_question, str):
        return GREETING_HELP
    return HELP_TEXTS.get(last_question, GREETING_HELP)


JOKE_INTRO_HELP = (
    "Knock knock jokes are a fun call and response type of joke. "
    "To start the joke, just ask by saying tell me a joke, or you can say exit."
)

JOKE_HELP_TEXTS: Dict[int, str] = {
    0: JOKE_INTRO_HELP,
    1: "You can ask, who's there, or you can say exit.",
    2: "You can ask, who, or you can say exit.",
}


def resolve_joke_help(stage: Any) -> str:
    """Return the guidance for where the user is in the knock-knock joke."""
    if isinstance(stage, bool) or not isinstance(stage, int):
        return JOKE_INTRO_HELP
    return JOKE_HELP_TEXTS.get(stage, JOKE_INTRO_HELP)
