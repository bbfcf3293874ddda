# whogotpwned/services/query.py
import structlog

from whogotpwned.database.store import LookupStore
from whogotpwned.errors import InvalidInput
from whogotpwned.models import CheckOutcome, CheckSource, EmailCheckRecord
from whogotpwned.utils.normalization import is_valid_email, normalize_email

logger = structlog.get_logger(__name__)

SAFE_NOTE = "No breaches found - your email appears to be safe"


def breach_note(total: int) -> str:
    if total == 0:
        return SAFE_NOTE
    return f"Found in {total} data breach{'es' if total > 1 else ''}"


class QueryService:
    """Validates an email, looks it up and shapes the outcome."""

    def __init__(self, store: LookupStore, record_checks: bool = False):
        self.store = store
        self.record_checks = record_checks

    def check_email(self, raw_email) -> CheckOutcome:
        if raw_email is None or not str(raw_email).strip():
            raise InvalidInput("Email is required")
        email = normalize_email(str(raw_email))
        if not is_valid_email(email):
            raise InvalidInput("Please enter a valid email address")

        logger.info("checking_email", email=email, backend=self.store.backend)
        breaches = self.store.find_breaches(email)

        if self.record_checks:
            self.store.record_check(EmailCheckRecord.from_breaches(email, breaches, CheckSource.MANUAL))

        return CheckOutcome(
            found=bool(breaches),
            breaches=breaches,
            total_breaches=len(breaches),
            note=breach_note(len(breaches)),
        )
