from datetime import date
from typing import Iterable, Optional

from . import settings
from .evaluator import predicted_empty_date
from .schemas import CalendarDay, CalendarEntry, InventoryItem, StockStatus
from .utils import days_until_date


def calendar_status(
    empty_date: Optional[date],
    lead_time: int,
    today: date,
    safety_margin_days: int = settings.SAFETY_MARGIN_DAYS,
) -> StockStatus:
    """
    Status of a stock-out date on the calendar, measured in whole days from today.
    A missing date is SAFE.
    """
    days_until = days_until_date(empty_date, today)
    if days_until is None:
        return StockStatus.SAFE
    if days_until <= lead_time:
        return StockStatus.URGENT
    if days_until <= lead_time + safety_margin_days:
        return StockStatus.WARNING
    return StockStatus.SAFE


def build_stockout_calendar(
    items: Iterable[InventoryItem],
    today: date,
    safety_margin_days: int = settings.SAFETY_MARGIN_DAYS,
) -> list[CalendarDay]:
    """
    Groups items by the day they are predicted to run out.
    Items without a predicted date (no daily usage) are left off the calendar.
    """
    days: dict[date, CalendarDay] = {}
    for item in items:
        empty_date = predicted_empty_date(item, today)
        if empty_date is None:
            continue

        day = days.setdefault(empty_date, CalendarDay(day=empty_date))
        day.items.append(
            CalendarEntry(
                id=item.id,
                name=item.name,
                status=calendar_status(empty_date, item.lead_time, today, safety_margin_days),
            )
        )

    return [days[key] for key in sorted(days)]
