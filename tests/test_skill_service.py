from unittest.mock import MagicMock, patch

import pytest

from babysitter.errors import InvalidApplicationIdError, UnknownIntentError, UnsupportedRequestError
from babysitter.models import Card, SkillResponse
from babysitter.schemas import SkillRequest
from babysitter.services.skill_service import (
    SkillService,
    get_skill_service,
    response_to_dict,
)
from babysitter.skill.controller import DialogController
from babysitter.skill.responses import ask, plain, ssml

APP_ID = "amzn1.echo-sdk-ams.app.babysitter"


def build_request(
    request_type: str = "LaunchRequest",
    intent: str | None = None,
    attributes: dict | None = None,
    new: bool = False,
    application_id: str = APP_ID,
) -> SkillRequest:
    request: dict = {"type": request_type, "requestId": "req-1"}
    if intent is not None:
        request["intent"] = {"name": intent, "slots": {}}
    return SkillRequest.model_validate(
        {
            "version": "1.0",
            "session": {
                "new": new,
                "sessionId": "session-1",
                "application": {"applicationId": application_id},
                "attributes": attributes,
            },
            "request": request,
        }
    )


@pytest.fixture
def service(controller: DialogController) -> SkillService:
    return SkillService(controller=controller, app_id=APP_ID)


def test_launch_envelope(service: SkillService) -> None:
    envelope = service.execute(build_request(new=True))

    assert envelope["version"] == "1.0"
    assert envelope["sessionAttributes"] == {"lastQuestion": "greeting"}
    body = envelope["response"]
    assert body["outputSpeech"] == {
        "type": "PlainText",
        "text": "Welcome to Babysitter. Have you already saved a child?",
    }
    assert body["reprompt"] == {"outputSpeech": {"type": "PlainText", "text": "Please say yes or no"}}
    assert body["card"]["type"] == "Simple"
    assert body["card"]["title"] == "Babysitter"
    assert body["shouldEndSession"] is False


def test_null_attributes_treated_as_empty(service: SkillService) -> None:
    envelope = service.execute(build_request("IntentRequest", "WhosThereIntent", attributes=None))
    assert envelope["sessionAttributes"] == {}
    assert "couldn't correctly retrieve" in envelope["response"]["outputSpeech"]["ssml"]


def test_intent_request_carries_attributes_forward(service: SkillService) -> None:
    envelope = service.execute(
        build_request("IntentRequest", "WhosThereIntent", attributes={"stage": 1, "setup": "Boo"})
    )

    assert envelope["sessionAttributes"] == {"stage": 2, "setup": "Boo"}
    assert envelope["response"]["outputSpeech"] == {"type": "SSML", "ssml": "<speak>Boo</speak>"}


def test_new_session_calls_session_started(controller: DialogController) -> None:
    controller.on_session_started = MagicMock()
    service = SkillService(controller=controller)

    service.handle(build_request(new=True))
    service.handle(build_request(new=False))

    controller.on_session_started.assert_called_once()
    assert controller.on_session_started.call_args[0][1] == "req-1"


def test_session_ended_request(service: SkillService) -> None:
    envelope = service.execute(build_request("SessionEndedRequest", attributes={"stage": 1}))

    assert envelope["response"] == {"shouldEndSession": True}
    assert envelope["sessionAttributes"] == {"stage": 1}


def test_wrong_application_id_rejected(service: SkillService) -> None:
    with pytest.raises(InvalidApplicationIdError):
        service.handle(build_request(application_id="amzn1.echo-sdk-ams.app.other"))


def test_no_app_id_accepts_any_application(controller: DialogController) -> None:
    service = SkillService(controller=controller, app_id=None)
    turn = service.handle(build_request(application_id="anything"))
    assert turn.attributes["lastQuestion"] == "greeting"


def test_intent_request_without_intent(service: SkillService) -> None:
    with pytest.raises(UnknownIntentError):
        service.handle(build_request("IntentRequest"))


def test_unknown_intent_propagates(service: SkillService) -> None:
    with pytest.raises(UnknownIntentError):
        service.handle(build_request("IntentRequest", "TellMeAJokeIntent"))


def test_unsupported_request_type(service: SkillService) -> None:
    with pytest.raises(UnsupportedRequestError) as exc_info:
        service.handle(build_request("AudioPlayer.PlaybackStarted"))
    assert exc_info.value.request_type == "AudioPlayer.PlaybackStarted"


def test_response_to_dict_omits_missing_parts() -> None:
    assert response_to_dict(SkillResponse()) == {"shouldEndSession": True}


def test_response_to_dict_ssml_and_card() -> None:
    response = SkillResponse(
        speech=ssml("Hi"),
        reprompt=plain("Again"),
        card=Card(title="T", content="C"),
        should_end_session=False,
    )
    assert response_to_dict(response) == {
        "outputSpeech": {"type": "SSML", "ssml": "<speak>Hi</speak>"},
        "card": {"type": "Simple", "title": "T", "content": "C"},
        "reprompt": {"outputSpeech": {"type": "PlainText", "text": "Again"}},
        "shouldEndSession": False,
    }


def test_ask_response_keeps_session_open() -> None:
    assert response_to_dict(ask(plain("a"), plain("b")))["shouldEndSession"] is False


def test_ssml_is_wrapped_once() -> None:
    assert ssml("<speak>Hi</speak>").text == "<speak>Hi</speak>"


def test_get_skill_service_uses_configured_app_id() -> None:
    with patch("babysitter.services.skill_service.get_settings") as get_settings:
        get_settings.return_value = MagicMock(app_id=f"  {APP_ID} ")
        service = get_skill_service()
        with pytest.raises(InvalidApplicationIdError):
            service.handle(build_request(application_id="other"))

        get_settings.return_value = MagicMock(app_id="")
        assert get_skill_service().handle(build_request(application_id="other")) is not None
