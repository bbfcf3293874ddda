# whogotpwned/services/stats.py
from whogotpwned.database.store import LookupStore
from whogotpwned.models import DomainCount, SeverityCounts, StatsSnapshot

TOP_DOMAINS = 5


def breach_percentage(breached: int, total: int) -> str:
    if total == 0:
        return "0.00"
    return f"{breached / total * 100:.2f}"


def compute_stats(store: LookupStore) -> StatsSnapshot:
    """
    Summarize the store in one pass over all_records().

    Severity and domain tallies count every record, so a breach listed under
    two emails counts twice. Domains tied on count keep the order in which
    they were first seen.
    """
    breached_emails = 0
    total_records = 0
    severity = {"high": 0, "medium": 0, "low": 0}
    domains = {}

    for _email, records in store.all_records():
        if not records:
            continue
        breached_emails += 1
        for record in records:
            total_records += 1
            severity[record.severity.value] += 1
            domains[record.domain] = domains.get(record.domain, 0) + 1

    safe_emails = len(store.safe_emails())
    total_emails = breached_emails + safe_emails

    # stable sort: ties keep first-seen order
    top = sorted(domains.items(), key=lambda kv: kv[1], reverse=True)[:TOP_DOMAINS]

    return StatsSnapshot(
        total_emails=total_emails,
        breached_emails=breached_emails,
        safe_emails=safe_emails,
        recent_checks=None,
        total_breach_records=total_records,
        unique_breached_emails=breached_emails,
        breach_percentage=breach_percentage(breached_emails, total_emails),
        severity_counts=SeverityCounts(**severity),
        top_domains=[DomainCount(domain=d, count=c) for d, c in top],
    )
