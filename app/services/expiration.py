import calendar
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from app.schemas.marketplace import ContractTerm, Frequency

# Calendar step per frequency as (months, days).
FREQUENCY_STEPS: Dict[Frequency, tuple[int, int]] = {
    Frequency.DAILY: (0, 1),
    Frequency.MONTHLY: (1, 0),
    Frequency.QUARTERLY: (3, 0),
    Frequency.SIX_MONTHS: (6, 0),
    Frequency.YEARLY: (12, 0),
    Frequency.TWO_YEARS: (24, 0),
    Frequency.THREE_YEARS: (36, 0),
}


def add_months(moment: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the last day of the target month."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def expiration_datetime(term: ContractTerm, today: Optional[datetime] = None) -> datetime:
    today = today or datetime.now(timezone.utc)
    units = term.minimum_service_length if term.minimum_service_length is not None else 1
    try:
        months, days = FREQUENCY_STEPS[Frequency(term.frequency)]
    except ValueError:
        return today + timedelta(days=1)
    if months:
        return add_months(today, months * units)
    return today + timedelta(days=days * units)


def compute_expiration(term: ContractTerm, today: Optional[datetime] = None) -> int:
    """Expiration of a discount code for `term`, in milliseconds since the epoch."""
    return int(expiration_datetime(term, today).timestamp() * 1000)
