"""Dialog logic for the Babysitter skill.

The controller maps lifecycle events and intents to handler functions in
`dialogs` (child management) and `joke` (knock-knock joke).
"""

from .controller import DialogController, get_controller
from .help import resolve_help, resolve_joke_help

__all__ = [
    "DialogController",
    "get_controller",
    "resolve_help",
    "resolve_joke_help",
]
