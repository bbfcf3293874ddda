import structlog
from fastapi import APIRouter, Depends

from whogotpwned.api.deps import get_store
from whogotpwned.database.store import LookupStore
from whogotpwned.errors import InternalError
from whogotpwned.services.stats import compute_stats

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats")
def get_stats(store: LookupStore = Depends(get_store)):
    try:
        snapshot = compute_stats(store)
    except Exception as e:
        logger.exception("stats_failed")
        raise InternalError("Failed to fetch statistics") from e
    return {"success": True, "data": snapshot.model_dump(by_alias=True, mode="json")}
