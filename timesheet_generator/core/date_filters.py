from datetime import timedelta, date
from typing import List, Optional, Tuple

DEFAULT_RANGE_DAYS = 15


def expand_range(start: date, end: date) -> List[date]:
    """Every calendar day from start to end, both inclusive, ascending."""
    if start > end:
        raise ValueError(f"Start date {start} is after end date {end}")
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def last_n_days(days: int = DEFAULT_RANGE_DAYS, end: Optional[date] = None) -> List[date]:
    """The `days` contiguous dates ending at `end` (default today)."""
    if days < 1:
        raise ValueError("At least one day is required")
    end = end or date.today()
    return expand_range(end - timedelta(days=days - 1), end)


def get_date_range(filter_type: str, today: Optional[date] = None) -> Tuple[date, date]:
    """
    Returns (start_date, end_date) for filter types.

    Supported filter types:
    - 'last_15_days': The 15 days ending today (the generator's default period)
    - 'today': Current day
    - 'yesterday': Previous day
    - 'this_week' or 'current_week': Monday to Sunday of current week
    - 'last_week': Monday to Sunday of previous week
    - 'this_month': First to last day of current month
    - 'last_month': First to last day of previous month
    """
    today = today or date.today()

    if filter_type == 'last_15_days':
        return (today - timedelta(days=DEFAULT_RANGE_DAYS - 1), today)

    elif filter_type == 'today':
        return (today, today)

    elif filter_type == 'yesterday':
        yesterday = today - timedelta(days=1)
        return (yesterday, yesterday)

    elif filter_type == 'this_week' or filter_type == 'current_week':
        # Monday of current week (weekday: 0=Monday, 6=Sunday)
        start = today - timedelta(days=today.weekday())
        end = start + timedelta(days=6)  # Sunday
        return (start, end)

    elif filter_type == 'last_week':
        current_week_start = today - timedelta(days=today.weekday())
        start = current_week_start - timedelta(days=7)
        end = start + timedelta(days=6)
        return (start, end)

    elif filter_type == 'this_month':
        start = today.replace(day=1)
        if today.month == 12:
            end = today.replace(day=31)
        else:
            next_month = today.replace(month=today.month + 1, day=1)
            end = next_month - timedelta(days=1)
        return (start, end)

    elif filter_type == 'last_month':
        first_of_this_month = today.replace(day=1)
        last_of_last_month = first_of_this_month - timedelta(days=1)
        start = last_of_last_month.replace(day=1)
        end = last_of_last_month
        return (start, end)

    else:
        raise ValueError(f"Unknown filter type: {filter_type}")


def resolve_period(
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    date_range: Optional[str] = None,
    default_days: int = DEFAULT_RANGE_DAYS,
) -> Tuple[date, date]:
    """
    Pick the period a request refers to.

    Explicit dates win over a named preset; with neither, the `default_days`
    days ending today are used.
    """
    if from_date is not None or to_date is not None:
        if from_date is None or to_date is None:
            raise ValueError("from_date and to_date must be given together")
        if from_date > to_date:
            raise ValueError("to_date must be greater than or equal to from_date")
        return (from_date, to_date)

    if date_range:
        return get_date_range(date_range)

    days = last_n_days(default_days)
    return (days[0], days[-1])
