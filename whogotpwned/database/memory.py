# whogotpwned/database/memory.py
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from whogotpwned.database.sample_data import SAFE_EMAILS, SAMPLE_BREACHES
from whogotpwned.models import BreachRecord, EmailCheckRecord
from whogotpwned.utils.normalization import normalize_email


class InMemoryLookupStore:
    """Read-only breach dataset held in process memory."""

    backend = "memory"

    def __init__(self, breaches: Mapping[str, Iterable[BreachRecord]] = None, safe_emails: Iterable[str] = ()):
        self._breaches: Dict[str, Tuple[BreachRecord, ...]] = {}
        for email, records in (breaches or {}).items():
            key = normalize_email(email)
            merged = self._breaches.get(key, ()) + tuple(records)
            if merged:
                self._breaches[key] = merged

        self._safe: List[str] = []
        for email in safe_emails:
            key = normalize_email(email)
            if key not in self._safe:
                self._safe.append(key)

    @classmethod
    def from_dicts(cls, data: Mapping[str, Iterable[dict]], safe_emails: Iterable[str] = ()) -> "InMemoryLookupStore":
        return cls(
            {email: [BreachRecord.model_validate(raw) for raw in raws] for email, raws in data.items()},
            safe_emails,
        )

    @classmethod
    def from_sample_data(cls) -> "InMemoryLookupStore":
        return cls.from_dicts(SAMPLE_BREACHES, SAFE_EMAILS)

    def find_breaches(self, email: str) -> List[BreachRecord]:
        return list(self._breaches.get(email, ()))

    def count_all(self) -> int:
        return len(self._breaches)

    def all_records(self) -> Iterator[Tuple[str, List[BreachRecord]]]:
        for email, records in list(self._breaches.items()):
            yield email, list(records)

    def safe_emails(self) -> List[str]:
        return list(self._safe)

    def record_check(self, record: EmailCheckRecord) -> None:
        # the embedded dataset is never written to
        return None

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        return None
