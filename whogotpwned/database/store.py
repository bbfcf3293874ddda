# whogotpwned/database/store.py
from typing import Iterator, List, Protocol, Tuple

import structlog

from whogotpwned.config import (
    DB_NAME, LEAKCHECK_URL, LOOKUP_BACKEND, MONGO_URI, SEED_SAMPLE_DATA, UPSTREAM_TIMEOUT
)
from whogotpwned.database.memory import InMemoryLookupStore
from whogotpwned.database.mongo import MongoLookupStore, connect
from whogotpwned.models import BreachRecord, EmailCheckRecord
from whogotpwned.scrapers.breach_check import LeakCheckLookupStore

logger = structlog.get_logger(__name__)

BACKENDS = ("memory", "mongo", "leakcheck")


class LookupStore(Protocol):
    """Read interface over known breach data. Emails passed in are already normalized."""

    backend: str

    def find_breaches(self, email: str) -> List[BreachRecord]:
        ...

    def count_all(self) -> int:
        ...

    def all_records(self) -> Iterator[Tuple[str, List[BreachRecord]]]:
        ...

    def safe_emails(self) -> List[str]:
        ...

    def record_check(self, record: EmailCheckRecord) -> None:
        ...

    def ping(self) -> bool:
        ...

    def close(self) -> None:
        ...


def build_store(backend: str = None) -> LookupStore:
    """Create the store selected by LOOKUP_BACKEND (or `backend`)."""
    backend = (backend or LOOKUP_BACKEND).lower()

    if backend == "memory":
        return InMemoryLookupStore.from_sample_data()

    if backend == "mongo":
        client = connect(MONGO_URI)
        store = MongoLookupStore(client[DB_NAME], client=client)
        logger.info("mongo_connected", db=DB_NAME)
        store.ensure_indexes()
        if SEED_SAMPLE_DATA:
            store.seed_sample_data()
        return store

    if backend == "leakcheck":
        return LeakCheckLookupStore(url=LEAKCHECK_URL, timeout=UPSTREAM_TIMEOUT)

    raise ValueError(f"Unknown lookup backend {backend!r}; expected one of {', '.join(BACKENDS)}")
