# whogotpwned/database/mongo.py
from contextlib import contextmanager
from datetime import date, datetime, timezone
from itertools import groupby
from operator import itemgetter
from typing import Iterator, List, Optional, Tuple

import certifi
import structlog
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from whogotpwned.config import MONGO_URI
from whogotpwned.database.sample_data import SAMPLE_BREACHES, SAMPLE_CHECKS
from whogotpwned.errors import InternalError
from whogotpwned.models import BreachRecord, EmailCheckRecord

logger = structlog.get_logger(__name__)

BREACH_RECORDS = "breach_records"
EMAIL_CHECKS = "email_checks"


def connect(uri: str = MONGO_URI) -> MongoClient:
    """Open a client and ping the server. Raises if the server is unreachable."""
    kwargs = {
        "serverSelectionTimeoutMS": 15000,
        "connectTimeoutMS": 15000,
        "socketTimeoutMS": 15000,
    }
    if uri.startswith("mongodb+srv://"):
        # Atlas: force modern TLS + fresh CA bundle
        kwargs.update(tls=True, tlsCAFile=certifi.where(), tlsAllowInvalidCertificates=False)

    client = MongoClient(uri, **kwargs)
    client.admin.command("ping")
    return client


@contextmanager
def _driver_errors(operation: str):
    try:
        yield
    except PyMongoError as e:
        logger.error("mongo_operation_failed", operation=operation, error=str(e))
        raise InternalError("Internal server error") from e


def _as_date(value) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _as_datetime(value: Optional[date]) -> Optional[datetime]:
    # BSON has no date type; store midnight UTC
    if value is None:
        return None
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def breach_document(email: str, record: BreachRecord) -> dict:
    now = datetime.now(timezone.utc)
    return {
        "email": email,
        "breachName": record.breach_name,
        "domain": record.domain,
        "breachDate": _as_datetime(record.breach_date),
        "compromisedData": sorted(f.value for f in record.compromised_data),
        "severity": record.severity.value,
        "description": record.description,
        "source": record.source,
        "discoveredAt": now,
        "createdAt": now,
        "updatedAt": now,
    }


def record_from_document(doc: dict) -> BreachRecord:
    return BreachRecord(
        breach_name=doc["breachName"],
        domain=doc.get("domain") or "",
        breach_date=_as_date(doc.get("breachDate")),
        compromised_data=frozenset(doc.get("compromisedData") or []),
        severity=doc.get("severity") or "medium",
        description=doc.get("description"),
        source=doc.get("source") or "system",
    )


class MongoLookupStore:
    """Breach records and email checks kept in MongoDB."""

    backend = "mongo"

    def __init__(self, db, client: MongoClient = None):
        self.db = db
        self.client = client
        self.breach_records = db[BREACH_RECORDS]
        self.email_checks = db[EMAIL_CHECKS]

    def ensure_indexes(self) -> None:
        with _driver_errors("ensure_indexes"):
            self.breach_records.create_index("email")
            self.breach_records.create_index("breachName")
            self.breach_records.create_index([("email", ASCENDING), ("breachName", ASCENDING)])
            self.breach_records.create_index([("domain", ASCENDING), ("breachDate", DESCENDING)])
            self.email_checks.create_index("email", unique=True)
            self.email_checks.create_index([("isBreached", ASCENDING), ("lastChecked", DESCENDING)])

    def seed_sample_data(self) -> dict:
        """Insert the demo dataset into whichever collections are empty."""
        inserted = {BREACH_RECORDS: 0, EMAIL_CHECKS: 0}
        with _driver_errors("seed_sample_data"):
            if self.breach_records.count_documents({}) == 0:
                docs = [
                    breach_document(email, BreachRecord.model_validate(raw))
                    for email, raws in SAMPLE_BREACHES.items()
                    for raw in raws
                ]
                self.breach_records.insert_many(docs)
                inserted[BREACH_RECORDS] = len(docs)
                logger.info("sample_breaches_seeded", count=len(docs))

            if self.email_checks.count_documents({}) == 0:
                now = datetime.now(timezone.utc)
                docs = [
                    dict(check, breaches=list(check["breaches"]), lastChecked=now, createdAt=now, updatedAt=now)
                    for check in SAMPLE_CHECKS
                ]
                self.email_checks.insert_many(docs)
                inserted[EMAIL_CHECKS] = len(docs)
                logger.info("sample_checks_seeded", count=len(docs))
        return inserted

    def find_breaches(self, email: str) -> List[BreachRecord]:
        with _driver_errors("find_breaches"):
            docs = list(self.breach_records.find({"email": email}).sort("_id", ASCENDING))
        return [record_from_document(d) for d in docs]

    def count_all(self) -> int:
        with _driver_errors("count_all"):
            return len(self.breach_records.distinct("email"))

    def all_records(self) -> Iterator[Tuple[str, List[BreachRecord]]]:
        with _driver_errors("all_records"):
            cursor = self.breach_records.find({}).sort([("email", ASCENDING), ("_id", ASCENDING)])
            for email, docs in groupby(cursor, key=itemgetter("email")):
                yield email, [record_from_document(d) for d in docs]

    def safe_emails(self) -> List[str]:
        with _driver_errors("safe_emails"):
            breached = set(self.breach_records.distinct("email"))
            cursor = self.email_checks.find({"isBreached": False}, {"_id": 0, "email": 1}).sort("email", ASCENDING)
            return [d["email"] for d in cursor if d["email"] not in breached]

    def record_check(self, record: EmailCheckRecord) -> None:
        now = datetime.now(timezone.utc)
        doc = record.to_document()
        doc["updatedAt"] = now
        with _driver_errors("record_check"):
            # single atomic upsert per email
            self.email_checks.update_one(
                {"email": record.email},
                {"$set": doc, "$setOnInsert": {"createdAt": now}},
                upsert=True,
            )

    def ping(self) -> bool:
        try:
            self.db.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("mongo_ping_failed", error=str(e))
            return False

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
