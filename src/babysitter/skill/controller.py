import logging
from typing import Callable, Dict, Iterable, Mapping, Tuple

from ..errors import UnknownIntentError
from ..models import DialogTurn, SessionState
from . import dialogs, joke
from .responses import end_session

logger = logging.getLogger(__name__)

IntentHandler = Callable[[Mapping], DialogTurn]

DEFAULT_INTENT_HANDLERS: Dict[str, IntentHandler] = {
    "AMAZON.YesIntent": dialogs.yes,
    "AMAZON.NoIntent": dialogs.no,
    "AMAZON.HelpIntent": dialogs.help_,
    "AMAZON.StopIntent": dialogs.goodbye,
    "AMAZON.CancelIntent": dialogs.goodbye,
    "WhosThereIntent": joke.whos_there,
    "SetupNameWhoIntent": joke.setup_name_who,
}

# Short names some interaction models use for the built-in intents.
INTENT_ALIASES: Dict[str, str] = {
    "YesIntent": "AMAZON.YesIntent",
    "NoIntent": "AMAZON.NoIntent",
    "HelpIntent": "AMAZON.HelpIntent",
    "StopIntent": "AMAZON.StopIntent",
    "CancelIntent": "AMAZON.CancelIntent",
}


class DialogController:
    """Routes lifecycle events and intents to dialog handlers.

    Handlers receive the session's attributes and return a DialogTurn holding
    the response and the attributes for the next turn. The session passed in
    is never modified.
    """

    def __init__(
        self,
        intent_handlers: Mapping[str, IntentHandler] | None = None,
        launch_handler: IntentHandler = dialogs.greeting,
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._handlers: Dict[str, IntentHandler] = dict(
            DEFAULT_INTENT_HANDLERS if intent_handlers is None else intent_handlers
        )
        self._launch_handler = launch_handler
        self._aliases: Dict[str, str] = dict(INTENT_ALIASES if aliases is None else aliases)

    @property
    def intents(self) -> Iterable[str]:
        """Names of the intents this controller can handle (aliases excluded)."""
        return tuple(self._handlers)

    def resolve(self, intent_name: str | None) -> Tuple[str, IntentHandler]:
        """Return the canonical intent name and its handler.

        Raises:
            UnknownIntentError: If no handler is registered for the intent.
        """
        if not intent_name:
            raise UnknownIntentError(intent_name)
        name = self._aliases.get(intent_name, intent_name)
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownIntentError(intent_name)
        return name, handler

    def on_session_started(self, session: SessionState, request_id: str | None = None) -> None:
        logger.info("onSessionStarted requestId=%s sessionId=%s", request_id, session.session_id)

    def on_launch(self, session: SessionState) -> DialogTurn:
        logger.info("onLaunch sessionId=%s", session.session_id)
        return self._launch_handler(session.attributes)

    def on_intent(self, intent_name: str | None, session: SessionState) -> DialogTurn:
        try:
            name, handler = self.resolve(intent_name)
        except UnknownIntentError:
            logger.warning("Unknown intent %r for sessionId=%s", intent_name, session.session_id)
            raise
        logger.info("onIntent %s sessionId=%s", name, session.session_id)
        turn = handler(session.attributes)
        logger.debug("Session %s attributes after %s: %s", session.session_id, name, turn.attributes)
        return turn

    def on_session_ended(self, session: SessionState, reason: str | None = None) -> DialogTurn:
        logger.info("onSessionEnded sessionId=%s reason=%s", session.session_id, reason)
        return DialogTurn(response=end_session(), attributes=dict(session.attributes))


_CONTROLLER = DialogController()


def get_controller() -> DialogController:
    return _CONTROLLER
