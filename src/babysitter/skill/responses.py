"""Builders for the four response shapes a dialog handler may return.

`ask` and `ask_with_card` keep the session open and require a reprompt;
`tell` and `tell_with_card` end it.
"""

from ..models import Card, OutputSpeech, SkillResponse, SpeechKind

SSML_OPEN = "<speak>"
SSML_CLOSE = "</speak>"


def plain(text: str) -> OutputSpeech:
    return OutputSpeech(text=text, kind=SpeechKind.PLAIN_TEXT)


def ssml(text: str) -> OutputSpeech:
    """Wrap text in a single <speak> element; already wrapped text is left as is."""
    if text.startswith(SSML_OPEN) and text.endswith(SSML_CLOSE):
        return OutputSpeech(text=text, kind=SpeechKind.SSML)
    return OutputSpeech(text=f"{SSML_OPEN}{text}{SSML_CLOSE}", kind=SpeechKind.SSML)


def ask(speech: OutputSpeech, reprompt: OutputSpeech) -> SkillResponse:
    return SkillResponse(speech=speech, reprompt=reprompt, should_end_session=False)


def ask_with_card(
    speech: OutputSpeech, reprompt: OutputSpeech, card_title: str, card_content: str
) -> SkillResponse:
    return SkillResponse(
        speech=speech,
        reprompt=reprompt,
        card=Card(title=card_title, content=card_content),
        should_end_session=False,
    )


def tell(speech: OutputSpeech) -> SkillResponse:
    return SkillResponse(speech=speech, should_end_session=True)


def tell_with_card(speech: OutputSpeech, card_title: str, card_content: str) -> SkillResponse:
    return SkillResponse(
        speech=speech,
        card=Card(title=card_title, content=card_content),
        should_end_session=True,
    )


def end_session() -> SkillResponse:
    """Silent response used when the platform reports the session is over."""
    return SkillResponse(should_end_session=True)
