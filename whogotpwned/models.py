# whogotpwned/models.py
from datetime import date, datetime, timezone
from enum import Enum
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


############################################
# Enumerations
############################################
class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CompromisedField(str, Enum):
    EMAIL = "email"
    PASSWORD = "password"
    USERNAME = "username"
    PHONE = "phone"
    ADDRESS = "address"
    CREDIT_CARD = "credit_card"
    SOCIAL_SECURITY = "social_security"


class CheckSource(str, Enum):
    MANUAL = "manual"
    IMPORT = "import"
    SYSTEM = "system"


############################################
# Breach data
############################################
class BreachRecord(BaseModel):
    """A single known breach an email address was exposed in."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    breach_name: str = Field(..., alias="breachName")
    domain: str = ""
    breach_date: Optional[date] = Field(None, alias="breachDate")
    compromised_data: FrozenSet[CompromisedField] = Field(default_factory=frozenset, alias="compromisedData")
    severity: Severity = Severity.MEDIUM
    description: Optional[str] = None
    source: str = "system"

    def summary(self) -> dict:
        """Client-facing view of the record."""
        return {
            "name": self.breach_name,
            "domain": self.domain,
            "breachDate": self.breach_date.isoformat() if self.breach_date else None,
            "description": self.description,
            "severity": self.severity.value,
            "compromisedData": sorted(f.value for f in self.compromised_data),
        }


class BreachSummary(BaseModel):
    """Subset of a breach embedded in an email check document."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    domain: Optional[str] = None
    breach_date: Optional[str] = Field(None, alias="breachDate")
    description: Optional[str] = None
    severity: Severity = Severity.MEDIUM

    @classmethod
    def from_record(cls, record: BreachRecord) -> "BreachSummary":
        return cls(
            name=record.breach_name,
            domain=record.domain,
            breach_date=record.breach_date.isoformat() if record.breach_date else None,
            description=record.description,
            severity=record.severity,
        )


class EmailCheckRecord(BaseModel):
    email: str
    is_breached: bool
    breaches: List[BreachSummary] = Field(default_factory=list)
    check_source: CheckSource = CheckSource.MANUAL
    last_checked: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def _breached_flag_matches(self):
        if self.is_breached != bool(self.breaches):
            raise ValueError("is_breached must be set exactly when breaches is non-empty")
        return self

    @classmethod
    def from_breaches(cls, email: str, breaches: List[BreachRecord],
                      check_source: CheckSource = CheckSource.MANUAL) -> "EmailCheckRecord":
        return cls(
            email=email,
            is_breached=bool(breaches),
            breaches=[BreachSummary.from_record(b) for b in breaches],
            check_source=check_source,
        )

    def to_document(self) -> dict:
        # camelCase keys, matching the email_checks collection
        return {
            "email": self.email,
            "isBreached": self.is_breached,
            "breaches": [b.model_dump(by_alias=True, mode="json") for b in self.breaches],
            "checkSource": self.check_source.value,
            "lastChecked": self.last_checked,
        }


############################################
# Service results
############################################
class CheckOutcome(BaseModel):
    found: bool
    breaches: List[BreachRecord]
    total_breaches: int
    note: str

    @model_validator(mode="after")
    def _found_matches_breaches(self):
        if not (self.found == (self.total_breaches > 0) == (len(self.breaches) > 0)):
            raise ValueError("found, total_breaches and breaches disagree")
        return self


class SeverityCounts(BaseModel):
    high: int = 0
    medium: int = 0
    low: int = 0


class DomainCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    domain: str = Field(..., alias="_id")
    count: int


class StatsSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    total_emails: int
    breached_emails: int
    safe_emails: int
    # no time-windowed count is kept; always None
    recent_checks: Optional[int] = None
    total_breach_records: int
    unique_breached_emails: int
    breach_percentage: str
    severity_counts: SeverityCounts
    top_domains: List[DomainCount]
