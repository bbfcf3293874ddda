from fastapi import APIRouter, Depends

from whogotpwned.api.deps import get_store
from whogotpwned.database.store import LookupStore

router = APIRouter(prefix="/api/debug", tags=["debug"])


@router.get("/breaches")
def dump_breaches(store: LookupStore = Depends(get_store)):
    """Full dump of the breach dataset. Only mounted when ENABLE_DEBUG_ROUTES is on."""
    data = {email: [r.summary() for r in records] for email, records in store.all_records()}
    return {"success": True, "data": data, "safeEmails": store.safe_emails()}
