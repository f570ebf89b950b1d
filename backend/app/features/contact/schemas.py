from collections.abc import Mapping
from typing import Annotated, Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError, field_validator
from pydantic.alias_generators import to_camel

FIELD_MESSAGES = {
    "name": "Name must be between 2 and 100 characters",
    "email": "Please provide a valid email address",
    "subject": "Subject must be between 5 and 200 characters",
    "message": "Message must be between 10 and 1000 characters",
    "company": "Company name must be less than 100 characters",
    "phone": "Phone number must be less than 20 characters",
}


class FieldError(BaseModel):
    field: str
    message: str


class ContactValidationError(ValueError):
    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("Validation failed")
        self.errors = errors


class ContactSubmission(BaseModel):
    """A contact form payload that passed every field rule.

    Text fields are trimmed before their length is checked. ``email`` is
    checked as given and stored normalised. Blank optional fields become
    ``None``, which is the "not provided" marker used all the way down to
    the ``contacts`` table.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
    email: str
    subject: Annotated[str, StringConstraints(strip_whitespace=True, min_length=5, max_length=200)]
    message: Annotated[str, StringConstraints(strip_whitespace=True, min_length=10, max_length=1000)]
    company: Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)] | None = None
    phone: Annotated[str, StringConstraints(strip_whitespace=True, max_length=20)] | None = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        try:
            result = validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(str(exc)) from exc
        return result.normalized.lower()

    @field_validator("company", "phone")
    @classmethod
    def _blank_is_not_provided(cls, value: str | None) -> str | None:
        return value or None


def validate_submission(payload: Mapping[str, Any] | None) -> ContactSubmission:
    """Check every field and raise one ``ContactValidationError`` listing all violations."""
    data = dict(payload) if isinstance(payload, Mapping) else {}
    if data.get("company") is None:
        data.pop("company", None)
    if data.get("phone") is None:
        data.pop("phone", None)

    try:
        return ContactSubmission.model_validate(data)
    except ValidationError as exc:
        errors: list[FieldError] = []
        seen: set[str] = set()
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "body"
            if field in seen:
                continue
            seen.add(field)
            errors.append(FieldError(field=field, message=FIELD_MESSAGES.get(field, error["msg"])))
        raise ContactValidationError(errors) from exc


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactSubmitResponse(_CamelModel):
    success: bool = True
    message: str = "Contact form submitted successfully!"
    contact_id: str
    admin_email_sent: bool
    confirmation_email_sent: bool


class ContactValidationFailedResponse(_CamelModel):
    success: bool = False
    message: str = "Validation failed"
    errors: list[FieldError] = Field(default_factory=list)


class ContactFailureResponse(_CamelModel):
    success: bool = False
    message: str = "Failed to process contact form"
    error: str
