from typing import Optional

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from whogotpwned.api.deps import get_query_service
from whogotpwned.errors import InternalError, QueryError
from whogotpwned.services.query import QueryService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["check"])


class CheckEmailRequest(BaseModel):
    email: Optional[str] = Field(None, examples=["test@example.com"])


def source_label(backend: str) -> str:
    return "leakcheck" if backend == "leakcheck" else "breach-database"


@router.post("/check-email")
def check_email(req: Optional[CheckEmailRequest] = None, service: QueryService = Depends(get_query_service)):
    """Check whether an email address appears in known breaches."""
    try:
        outcome = service.check_email(req.email if req else None)
    except QueryError:
        raise
    except Exception as e:
        logger.exception("email_check_failed")
        raise InternalError("Internal server error") from e

    return {
        "success": True,
        "found": outcome.found,
        "breaches": [b.summary() for b in outcome.breaches],
        "totalBreaches": outcome.total_breaches,
        "note": outcome.note,
        "source": source_label(service.store.backend),
    }
