from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.contact.schemas import (
    ContactFailureResponse,
    ContactSubmitResponse,
    ContactValidationFailedResponse,
)
from app.features.contact.services import ContactSubmissionHandler
from app.features.contact.store import SqlAlchemyContactStore
from app.platform.db.session import get_session
from app.platform.services.mailer import Mailer

router = APIRouter()


def get_contact_store(session: AsyncSession = Depends(get_session)) -> SqlAlchemyContactStore:
    return SqlAlchemyContactStore(session)


def get_mailer() -> Mailer:
    return Mailer()


def get_contact_handler(
    store: SqlAlchemyContactStore = Depends(get_contact_store),
    mailer: Mailer = Depends(get_mailer),
) -> ContactSubmissionHandler:
    return ContactSubmissionHandler(store=store, mailer=mailer)


@router.post(
    "/contact",
    response_model=ContactSubmitResponse,
    responses={400: {"model": ContactValidationFailedResponse}, 500: {"model": ContactFailureResponse}},
)
async def submit_contact(
    payload: dict[str, Any] = Body(...),
    handler: ContactSubmissionHandler = Depends(get_contact_handler),
) -> ContactSubmitResponse | JSONResponse:
    result = await handler.handle(payload)

    if result.is_validation_failure:
        body = ContactValidationFailedResponse(errors=result.errors)
        return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))

    if not result.success:
        body = ContactFailureResponse(error=result.error or "")
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))

    return ContactSubmitResponse(
        contact_id=result.contact_id or "",
        admin_email_sent=result.admin_email_sent,
        confirmation_email_sent=result.confirmation_email_sent,
    )
