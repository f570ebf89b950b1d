from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from app.features.contact.notifications import build_admin_notification, build_confirmation_notification
from app.features.contact.schemas import (
    ContactSubmission,
    ContactValidationError,
    FieldError,
    validate_submission,
)
from app.features.contact.store import SAVE_FAILED_MESSAGE, ContactPersistenceError, ContactRecord
from app.platform.config import Settings, settings
from app.platform.services.mailer import OutgoingEmail

logger = logging.getLogger(__name__)


class ContactStore(Protocol):
    async def insert(self, record: ContactRecord) -> str: ...


class EmailSender(Protocol):
    async def send(self, email: OutgoingEmail) -> str: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ContactResult:
    success: bool
    contact_id: str | None = None
    admin_email_sent: bool = False
    confirmation_email_sent: bool = False
    errors: list[FieldError] = field(default_factory=list)
    message: str | None = None
    error: str | None = None

    @property
    def is_validation_failure(self) -> bool:
        return not self.success and bool(self.errors)


def _summary(submission: ContactSubmission) -> str:
    domain = submission.email.rsplit("@", 1)[-1]
    return (
        f"email_domain={domain} subject_len={len(submission.subject)} "
        f"message_len={len(submission.message)} company={submission.company is not None} "
        f"phone={submission.phone is not None}"
    )


class ContactSubmissionHandler:
    """Validate a contact form payload, store it, then notify the admin and the submitter.

    The record write gates both emails. Email failures only clear the
    matching outcome flag; the request still succeeds once the record is
    stored.
    """

    def __init__(
        self,
        store: ContactStore,
        mailer: EmailSender,
        config: Settings | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._mailer = mailer
        self._config = config or settings
        self._clock = clock

    async def handle(self, payload: Mapping[str, Any] | None) -> ContactResult:
        try:
            submission = validate_submission(payload)
        except ContactValidationError as exc:
            logger.info("Contact form validation failed fields=%s", ",".join(e.field for e in exc.errors))
            return ContactResult(success=False, message=str(exc), errors=exc.errors)

        logger.info("Contact form submission received %s", _summary(submission))

        created_at = self._clock()
        record = ContactRecord.from_submission(submission, created_at)
        try:
            contact_id = await self._store.insert(record)
        except Exception as exc:
            logger.exception("Contact form could not be stored")
            error = str(exc) if isinstance(exc, ContactPersistenceError) else SAVE_FAILED_MESSAGE
            return ContactResult(success=False, message="Failed to process contact form", error=error)

        admin_sent, confirmation_sent = await asyncio.gather(
            self._attempt("admin", lambda: build_admin_notification(submission, created_at, self._config)),
            self._attempt(
                "confirmation",
                lambda: build_confirmation_notification(submission.email, submission.name, self._config),
            ),
        )

        logger.info(
            "Contact form stored contact_id=%s admin_email_sent=%s confirmation_email_sent=%s",
            contact_id,
            admin_sent,
            confirmation_sent,
        )
        return ContactResult(
            success=True,
            contact_id=str(contact_id),
            admin_email_sent=admin_sent,
            confirmation_email_sent=confirmation_sent,
        )

    async def _attempt(self, kind: str, compose: Callable[[], OutgoingEmail]) -> bool:
        try:
            await self._mailer.send(compose())
        except Exception as exc:
            logger.warning("%s email failed: %s", kind.capitalize(), exc)
            return False
        return True
