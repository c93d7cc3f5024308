"""
Stock evaluation for a single raw material.

Everything here is a pure function of the item's four numeric fields
(current stock, requirement per recipe, recipes today, lead time) and the
evaluation date. Inputs are expected to have passed schema validation;
nothing is checked or raised here.
"""

import math
from datetime import date
from typing import Optional

from . import settings
from .schemas import InventoryItem, StockEvaluation, StockStatus
from .utils import add_whole_days

NO_USAGE_RECOMMENDATION = "No daily usage, stock is safe."
URGENT_RECOMMENDATION = "Reorder now! Stock will run out before a new order can arrive."
WARNING_RECOMMENDATION = "Time to order. Order within the next {days}."
SAFE_RECOMMENDATION = "Stock is sufficient. The ideal time to order is in {days}."
LONG_LASTING_RECOMMENDATION = "Stock is sufficient. No reorder needed for the foreseeable future."


def _days(count: int) -> str:
    return "1 day" if count == 1 else f"{count} days"


def daily_requirement(item: InventoryItem) -> float:
    return item.requirement_per_recipe * item.recipes_today


def stock_duration_days(item: InventoryItem) -> float:
    """Days the current stock lasts at today's usage; math.inf when nothing is used."""
    daily = daily_requirement(item)
    if daily > 0:
        return item.current_stock / daily
    return math.inf


def predicted_empty_date(item: InventoryItem, today: date) -> Optional[date]:
    """
    The calendar date the stock runs out: `today` plus the whole days of stock left.
    None when there is no daily usage.
    """
    if daily_requirement(item) <= 0:
        return None
    return add_whole_days(today, stock_duration_days(item))


def _classify(
    item: InventoryItem, safety_margin_days: int
) -> tuple[StockStatus, str]:
    daily = daily_requirement(item)
    if daily == 0:
        return StockStatus.SAFE, NO_USAGE_RECOMMENDATION

    duration = item.current_stock / daily
    reorder_point = item.lead_time + safety_margin_days

    # Boundaries go to the more urgent bucket.
    if duration <= item.lead_time:
        return StockStatus.URGENT, URGENT_RECOMMENDATION
    if not math.isfinite(duration):
        return StockStatus.SAFE, LONG_LASTING_RECOMMENDATION

    order_in_days = math.floor(duration - item.lead_time)
    if duration <= reorder_point:
        return StockStatus.WARNING, WARNING_RECOMMENDATION.format(days=_days(order_in_days))
    return StockStatus.SAFE, SAFE_RECOMMENDATION.format(days=_days(order_in_days))


def get_stock_status(
    item: InventoryItem, safety_margin_days: int = settings.SAFETY_MARGIN_DAYS
) -> StockStatus:
    status, _ = _classify(item, safety_margin_days)
    return status


def evaluate_stock(
    item: InventoryItem,
    today: date,
    safety_margin_days: int = settings.SAFETY_MARGIN_DAYS,
) -> StockEvaluation:
    """
    Classifies one item and explains what to do about it.

    URGENT when the stock runs out within the supplier lead time,
    WARNING when it runs out within the lead time plus the safety margin,
    SAFE otherwise. An item with no daily usage is always SAFE.
    """
    status, recommendation = _classify(item, safety_margin_days)
    return StockEvaluation(
        daily_requirement=daily_requirement(item),
        stock_duration_days=stock_duration_days(item),
        status=status,
        recommendation=recommendation,
        predicted_empty_date=predicted_empty_date(item, today),
    )
