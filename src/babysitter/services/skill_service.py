import logging
from typing import Any, Dict

from ..errors import InvalidApplicationIdError, UnknownIntentError, UnsupportedRequestError
from ..models import DialogTurn, OutputSpeech, SessionState, SkillResponse, SpeechKind
from ..schemas import SkillRequest
from ..settings import get_settings
from ..skill.controller import DialogController, get_controller

logger = logging.getLogger(__name__)

RESPONSE_VERSION = "1.0"


def _speech_to_dict(speech: OutputSpeech) -> Dict[str, str]:
    if speech.kind is SpeechKind.SSML:
        return {"type": SpeechKind.SSML.value, "ssml": speech.text}
    return {"type": SpeechKind.PLAIN_TEXT.value, "text": speech.text}


def response_to_dict(response: SkillResponse) -> Dict[str, Any]:
    """Serialize a SkillResponse into the platform's `response` object."""
    body: Dict[str, Any] = {}
    if response.speech is not None:
        body["outputSpeech"] = _speech_to_dict(response.speech)
    if response.card is not None:
        body["card"] = {
            "type": "Simple",
            "title": response.card.title,
            "content": response.card.content,
        }
    if response.reprompt is not None:
        body["reprompt"] = {"outputSpeech": _speech_to_dict(response.reprompt)}
    body["shouldEndSession"] = response.should_end_session
    return body


def turn_to_envelope(turn: DialogTurn) -> Dict[str, Any]:
    return {
        "version": RESPONSE_VERSION,
        "sessionAttributes": turn.attributes,
        "response": response_to_dict(turn.response),
    }


def session_from_request(skill_request: SkillRequest) -> SessionState:
    session = skill_request.session
    return SessionState(
        session_id=session.session_id,
        attributes=dict(session.attributes or {}),
        new=session.new,
        application_id=session.application.application_id,
    )


class SkillService:
    """Validates an incoming request and hands it to the dialog controller."""

    def __init__(self, controller: DialogController, app_id: str | None = None) -> None:
        self._controller = controller
        self._app_id = app_id

    def _check_application(self, session: SessionState) -> None:
        if self._app_id and session.application_id != self._app_id:
            logger.warning(
                "Rejected request for applicationId=%s sessionId=%s",
                session.application_id,
                session.session_id,
            )
            raise InvalidApplicationIdError(session.application_id)

    def handle(self, skill_request: SkillRequest) -> DialogTurn:
        """Run one turn for the request.

        Raises:
            InvalidApplicationIdError: The request targets another skill.
            UnknownIntentError: The intent is missing or has no handler.
            UnsupportedRequestError: The request type is not one the skill answers.
        """
        session = session_from_request(skill_request)
        request = skill_request.request
        self._check_application(session)

        if session.new:
            self._controller.on_session_started(session, request.request_id)

        if request.type == "LaunchRequest":
            return self._controller.on_launch(session)
        if request.type == "IntentRequest":
            if request.intent is None:
                raise UnknownIntentError(None)
            return self._controller.on_intent(request.intent.name, session)
        if request.type == "SessionEndedRequest":
            return self._controller.on_session_ended(session, request.reason)
        raise UnsupportedRequestError(request.type)

    def execute(self, skill_request: SkillRequest) -> Dict[str, Any]:
        """Handle the request and return the response envelope."""
        return turn_to_envelope(self.handle(skill_request))


def get_skill_service() -> SkillService:
    """Build a SkillService bound to the shared controller and configured app id."""
    settings = get_settings()
    app_id = settings.app_id.strip() if settings.app_id else None
    return SkillService(controller=get_controller(), app_id=app_id or None)
