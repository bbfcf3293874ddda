from __future__ import annotations

from datetime import date

import pytest

from whogotpwned.database.memory import InMemoryLookupStore
from whogotpwned.errors import InvalidInput
from whogotpwned.models import BreachRecord, Severity
from whogotpwned.services.query import SAFE_NOTE, QueryService, breach_note
from whogotpwned.utils.normalization import normalize_email


class RecordingStore(InMemoryLookupStore):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lookups = []
        self.recorded = []

    def find_breaches(self, email):
        self.lookups.append(email)
        return super().find_breaches(email)

    def record_check(self, record):
        self.recorded.append(record)


def _store():
    return RecordingStore(
        {
            "test@example.com": [
                BreachRecord(breach_name="Adobe Breach 2013", domain="adobe.com",
                             breach_date=date(2013, 10, 4), severity=Severity.HIGH),
                BreachRecord(breach_name="LinkedIn Breach 2012", domain="linkedin.com",
                             breach_date=date(2012, 6, 5), severity=Severity.HIGH),
            ],
            "hacked@gmail.com": [
                BreachRecord(breach_name="Facebook Breach 2019", domain="facebook.com",
                             breach_date=date(2019, 9, 1), severity=Severity.MEDIUM),
            ],
        },
        safe_emails=["safe@example.com"],
    )


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_missing_email_is_rejected_before_lookup(raw):
    store = _store()
    with pytest.raises(InvalidInput) as exc:
        QueryService(store).check_email(raw)
    assert exc.value.message == "Email is required"
    assert store.lookups == []


@pytest.mark.parametrize(
    "raw",
    ["plainaddress", "no-at-sign.com", "user@", "@example.com", "user@example", "a b@example.com", "a@@example.com"],
)
def test_malformed_email_is_rejected_before_lookup(raw):
    store = _store()
    with pytest.raises(InvalidInput) as exc:
        QueryService(store).check_email(raw)
    assert exc.value.message == "Please enter a valid email address"
    assert store.lookups == []


def test_normalization_is_idempotent():
    for raw in ["  User@Example.COM ", "test@example.com", "\tMiXeD@Mail.Org\n"]:
        once = normalize_email(raw)
        assert normalize_email(once) == once


def test_case_and_whitespace_do_not_change_outcome():
    service = QueryService(_store())
    assert service.check_email("Test@Example.com ") == service.check_email("test@example.com")


def test_breached_email_scenario():
    store = _store()
    outcome = QueryService(store).check_email("test@example.com")
    assert outcome.found is True
    assert outcome.total_breaches == 2
    assert [b.breach_name for b in outcome.breaches] == ["Adobe Breach 2013", "LinkedIn Breach 2012"]
    assert outcome.note == "Found in 2 data breaches"
    assert store.lookups == ["test@example.com"]


def test_unknown_email_is_safe_not_an_error():
    outcome = QueryService(_store()).check_email("safe@example.com")
    assert outcome.found is False
    assert outcome.breaches == []
    assert outcome.total_breaches == 0
    assert outcome.note == SAFE_NOTE


def test_found_matches_breach_count():
    service = QueryService(_store())
    for email in ["test@example.com", "hacked@gmail.com", "nobody@nowhere.net"]:
        outcome = service.check_email(email)
        assert outcome.found == (outcome.total_breaches > 0) == (len(outcome.breaches) > 0)


def test_note_is_singular_for_one_breach():
    assert breach_note(1) == "Found in 1 data breach"
    assert breach_note(3) == "Found in 3 data breaches"
    assert breach_note(0) == SAFE_NOTE


def test_checks_are_recorded_only_when_enabled():
    store = _store()
    QueryService(store).check_email("hacked@gmail.com")
    assert store.recorded == []

    QueryService(store, record_checks=True).check_email("Hacked@Gmail.com")
    QueryService(store, record_checks=True).check_email("safe@example.com")
    first, second = store.recorded
    assert first.email == "hacked@gmail.com"
    assert first.is_breached is True
    assert first.breaches[0].name == "Facebook Breach 2019"
    assert second.is_breached is False
    assert second.breaches == []
