"""Request envelope sent by the voice platform to the skill endpoint."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Envelope(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Application(_Envelope):
    application_id: str = ""


class Session(_Envelope):
    new: bool = False
    session_id: str
    application: Application = Field(default_factory=Application)
    attributes: Dict[str, Any] | None = None


class Intent(_Envelope):
    name: str
    slots: Dict[str, Any] | None = None


class Request(_Envelope):
    type: str
    request_id: str | None = None
    intent: Intent | None = None
    reason: str | None = None


class SkillRequest(_Envelope):
    version: str = "1.0"
    session: Session
    request: Request
