import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.features.contact.routes import get_contact_store
from app.features.contact.store import SqlAlchemyContactStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health() -> dict:
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/test", response_model=None)
async def database_check(store: SqlAlchemyContactStore = Depends(get_contact_store)) -> dict | JSONResponse:
    try:
        rows = await store.sample(limit=1)
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Database connection error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to connect to database", "details": str(exc)},
        )

    return {"message": "Successfully connected to database!", "data": rows}
