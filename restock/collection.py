"""
Search, status filter and sort over a collection of items.

Steps always run in this order: search -> status filter -> sort.
Each item is evaluated once per pass, against a single `today`.
"""

from datetime import date
from typing import Callable, Iterable, Optional

from . import settings
from .evaluator import evaluate_stock
from .schemas import (
    CollectionResult,
    EvaluatedItem,
    FilterStatus,
    InventoryItem,
    ItemQuery,
    SortOption,
)

# SortOption -> (key, descending). DEFAULT is absent: it keeps the incoming order.
SORT_KEYS: dict[SortOption, tuple[Callable[[EvaluatedItem], float], bool]] = {
    SortOption.STOCK_ASC: (lambda e: e.item.current_stock, False),
    SortOption.STOCK_DESC: (lambda e: e.item.current_stock, True),
    SortOption.DURATION_ASC: (lambda e: e.evaluation.stock_duration_days, False),
    SortOption.DURATION_DESC: (lambda e: e.evaluation.stock_duration_days, True),
    SortOption.LEAD_TIME_ASC: (lambda e: e.item.lead_time, False),
    SortOption.LEAD_TIME_DESC: (lambda e: e.item.lead_time, True),
}


def search_items(items: Iterable[InventoryItem], search_text: str) -> list[InventoryItem]:
    """Case-insensitive substring match on the item name. Empty text keeps everything."""
    if not search_text:
        return list(items)
    needle = search_text.lower()
    return [item for item in items if needle in item.name.lower()]


def filter_by_status(
    evaluated: Iterable[EvaluatedItem], status_filter: FilterStatus
) -> list[EvaluatedItem]:
    status_filter = FilterStatus(status_filter)
    if status_filter == FilterStatus.ALL:
        return list(evaluated)
    return [e for e in evaluated if e.status.value == status_filter.value]


def sort_items(evaluated: Iterable[EvaluatedItem], sort_option: SortOption) -> list[EvaluatedItem]:
    """
    Stable sort by the selected option. Ties keep their previous relative order,
    in both directions. Items with no daily usage have an infinite duration and
    sort as the longest-lasting.
    """
    evaluated = list(evaluated)
    sort_option = SortOption(sort_option)
    if sort_option not in SORT_KEYS:
        return evaluated
    key, descending = SORT_KEYS[sort_option]
    return sorted(evaluated, key=key, reverse=descending)


def filter_and_sort_items(
    items: Iterable[InventoryItem],
    query: Optional[ItemQuery] = None,
    today: Optional[date] = None,
    safety_margin_days: int = settings.SAFETY_MARGIN_DAYS,
) -> CollectionResult:
    """
    Runs the full pipeline and returns the result along with the pre-filter count.
    The input collection is not modified.
    """
    items = list(items)
    query = query or ItemQuery()
    # Read the date once so every item in this pass sees the same day.
    today = today or date.today()

    matched = search_items(items, query.search_text)
    evaluated = [
        EvaluatedItem(item=item, evaluation=evaluate_stock(item, today, safety_margin_days))
        for item in matched
    ]
    evaluated = filter_by_status(evaluated, query.status_filter)
    evaluated = sort_items(evaluated, query.sort_option)

    return CollectionResult(items=evaluated, total_count=len(items))
