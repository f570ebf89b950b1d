from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.contact.schemas import ContactSubmission
from app.platform.db.models import Contact

SAVE_FAILED_MESSAGE = "Failed to save contact form data"


class ContactPersistenceError(RuntimeError):
    pass


@dataclass(frozen=True)
class ContactRecord:
    name: str
    email: str
    company: str | None
    phone: str | None
    subject: str
    message: str
    created_at: datetime

    @classmethod
    def from_submission(cls, submission: ContactSubmission, created_at: datetime) -> ContactRecord:
        return cls(
            name=submission.name,
            email=submission.email,
            company=submission.company,
            phone=submission.phone,
            subject=submission.subject,
            message=submission.message,
            created_at=created_at,
        )


class SqlAlchemyContactStore:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, record: ContactRecord) -> str:
        contact = Contact(id=str(uuid.uuid4()), **asdict(record))
        self._session.add(contact)
        try:
            await self._session.commit()
        except (SQLAlchemyError, OSError) as exc:
            await self._session.rollback()
            raise ContactPersistenceError(SAVE_FAILED_MESSAGE) from exc
        return contact.id

    async def sample(self, limit: int = 1) -> list[dict]:
        result = await self._session.execute(
            select(Contact.id, Contact.created_at).order_by(Contact.created_at.desc()).limit(limit)
        )
        return [{"id": row.id, "created_at": row.created_at.isoformat()} for row in result]
