"""Errors raised by the skill when a request cannot be turned into a dialog turn."""


class SkillError(Exception):
    """Base class for skill errors. `code` is the machine-readable name sent to clients."""

    code = "skill_error"


class UnknownIntentError(SkillError):
    code = "unknown_intent"

    def __init__(self, intent_name: str | None) -> None:
        self.intent_name = intent_name
        super().__init__(f"Unsupported intent: {intent_name!r}")


class UnsupportedRequestError(SkillError):
    code = "unsupported_request"

    def __init__(self, request_type: str) -> None:
        self.request_type = request_type
        super().__init__(f"Unsupported request type: {request_type!r}")


class InvalidApplicationIdError(SkillError):
    code = "invalid_application_id"

    def __init__(self, application_id: str | None) -> None:
        self.application_id = application_id
        super().__init__(f"Invalid applicationId: {application_id!r}")
