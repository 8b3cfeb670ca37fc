from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: str | date) -> str:
    """Render a stored YYYY-MM-DD date as DD/MM/YYYY.

    The value is split into its parts and reassembled, it is never
    converted through a timezone.
    """
    if isinstance(value, date):
        value = value.isoformat()
    year, month, day = str(value)[:10].split("-")
    return f"{day}/{month}/{year}"


def format_br_date(moment: datetime) -> str:
    return moment.strftime("%d/%m/%Y")


def format_br_datetime(moment: datetime) -> str:
    return moment.strftime("%d/%m/%Y, %H:%M:%S")


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
