"""Query helpers for reading ledger rows out of a repository's DAO."""

from datetime import UTC, datetime

# Rows are read in pages so no provider-side default limit truncates a sum
PAGE_SIZE = 500


def fetch_all(dao, **filters):
    """Return every record matching ``filters``."""
    records = []
    offset = 0
    while True:
        query = dao.query.filter(**filters) if filters else dao.query
        page = query.offset(offset).limit(PAGE_SIZE).all().items
        records.extend(page)
        if len(page) < PAGE_SIZE:
            return records
        offset += PAGE_SIZE


def same_instant(left: datetime | None, right: datetime | None) -> bool:
    """Compare timestamps, treating naive values as UTC."""
    if left is None or right is None:
        return left is right
    return _as_utc(left) == _as_utc(right)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
