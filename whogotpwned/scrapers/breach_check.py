# whogotpwned/scrapers/breach_check.py
from datetime import date
from typing import Iterator, List, Optional, Tuple

import requests
import structlog

from whogotpwned.config import LEAKCHECK_URL, UPSTREAM_TIMEOUT
from whogotpwned.errors import UpstreamFailure
from whogotpwned.models import BreachRecord, CompromisedField, EmailCheckRecord, Severity

logger = structlog.get_logger(__name__)

HEADERS = {
    "Accept": "application/json",
    "User-Agent": "WhoGotPwned Breach Checker",
}

_KNOWN_FIELDS = {f.value for f in CompromisedField}
_KNOWN_SEVERITIES = {s.value for s in Severity}


def _parse_date(value) -> Optional[date]:
    """Accept YYYY-MM-DD, YYYY-MM or YYYY; anything else is unknown."""
    if not value:
        return None
    parts = str(value).strip()[:10].split("-")
    try:
        if len(parts) == 3:
            return date(int(parts[0]), int(parts[1]), int(parts[2]))
        if len(parts) == 2:
            return date(int(parts[0]), int(parts[1]), 1)
        if len(parts) == 1:
            return date(int(parts[0]), 1, 1)
    except ValueError:
        return None
    return None


def _known_fields(values) -> frozenset:
    if not isinstance(values, list):
        return frozenset()
    return frozenset(v for v in values if isinstance(v, str) and v in _KNOWN_FIELDS)


def _record_from_entry(entry, default_fields: frozenset) -> BreachRecord:
    if isinstance(entry, str):
        entry = {"name": entry}
    severity = entry.get("severity")
    fields = _known_fields(entry.get("compromisedData") or entry.get("fields")) or default_fields
    return BreachRecord(
        breach_name=entry.get("name") or entry.get("breachName") or entry.get("title") or "Unknown",
        domain=entry.get("domain") or "",
        breach_date=_parse_date(entry.get("breachDate") or entry.get("date")),
        compromised_data=fields,
        severity=severity if isinstance(severity, str) and severity in _KNOWN_SEVERITIES else Severity.MEDIUM,
        description=entry.get("description"),
        source="leakcheck",
    )


def _upstream_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        msg = body.get("error") or body.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    return f"Breach lookup service returned HTTP {response.status_code}"


class LeakCheckLookupStore:
    """
    Lookup store backed by the LeakCheck public API.
    Every lookup is one GET with a bounded timeout; nothing is retried.
    """

    backend = "leakcheck"

    def __init__(self, url: str = LEAKCHECK_URL, timeout: float = UPSTREAM_TIMEOUT, session: requests.Session = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def find_breaches(self, email: str) -> List[BreachRecord]:
        try:
            response = self.session.get(self.url, params={"check": email}, headers=HEADERS, timeout=self.timeout)
        except requests.Timeout as e:
            logger.warning("leakcheck_timeout", timeout=self.timeout)
            raise UpstreamFailure("Breach lookup service timed out") from e
        except requests.RequestException as e:
            logger.warning("leakcheck_unreachable", error=str(e))
            raise UpstreamFailure("Breach lookup service unavailable") from e

        if not 200 <= response.status_code < 300:
            message = _upstream_message(response)
            logger.warning("leakcheck_error_status", status=response.status_code, error=message)
            raise UpstreamFailure(message)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFailure("Invalid response from breach lookup service") from e
        if not isinstance(data, dict):
            raise UpstreamFailure("Invalid response from breach lookup service")

        error = data.get("error")
        if data.get("success") is False and isinstance(error, str) and error.strip():
            logger.warning("leakcheck_error_body", error=error)
            raise UpstreamFailure(error.strip())

        if not data.get("found"):
            return []

        entries = data.get("breaches") or data.get("sources") or []
        if not isinstance(entries, list):
            raise UpstreamFailure("Invalid response from breach lookup service")
        default_fields = _known_fields(data.get("fields"))
        try:
            return [_record_from_entry(e, default_fields) for e in entries if isinstance(e, (dict, str))]
        except (TypeError, ValueError) as e:
            # pydantic ValidationError is a ValueError
            logger.warning("leakcheck_malformed_entry", error=str(e))
            raise UpstreamFailure("Invalid response from breach lookup service") from e

    def count_all(self) -> int:
        # the remote service cannot be enumerated
        return 0

    def all_records(self) -> Iterator[Tuple[str, List[BreachRecord]]]:
        return iter(())

    def safe_emails(self) -> List[str]:
        return []

    def record_check(self, record: EmailCheckRecord) -> None:
        return None

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        self.session.close()
