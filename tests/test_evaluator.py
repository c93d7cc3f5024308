"""Tests for per-item stock evaluation and stock-out date prediction."""

import math
from datetime import timedelta

import pytest

from restock.evaluator import (
    daily_requirement,
    evaluate_stock,
    get_stock_status,
    predicted_empty_date,
    stock_duration_days,
)
from restock.schemas import StockStatus


class TestDerivedValues:
    def test_daily_requirement(self, make_item):
        item = make_item(requirement_per_recipe=0.5, recipes_today=20)
        assert daily_requirement(item) == 10

    def test_stock_duration(self, make_item):
        item = make_item(current_stock=50, requirement_per_recipe=0.5, recipes_today=20)
        assert stock_duration_days(item) == 5

    def test_stock_duration_is_infinite_without_usage(self, make_item):
        item = make_item(current_stock=50, recipes_today=0)
        assert stock_duration_days(item) == math.inf


class TestScenarios:
    def test_flour_orders_in_two_days(self, make_item, today):
        item = make_item(current_stock=50, requirement_per_recipe=0.5, recipes_today=20, lead_time=3)
        result = evaluate_stock(item, today)

        assert result.daily_requirement == 10
        assert result.stock_duration_days == 5
        assert result.status == StockStatus.WARNING
        assert result.recommendation == "Time to order. Order within the next 2 days."

    def test_butter_orders_in_one_day(self, make_item, today):
        item = make_item(current_stock=5, requirement_per_recipe=0.1, recipes_today=20, lead_time=1)
        result = evaluate_stock(item, today)

        assert result.daily_requirement == pytest.approx(2)
        assert result.stock_duration_days == pytest.approx(2.5)
        assert result.status == StockStatus.WARNING
        assert result.recommendation == "Time to order. Order within the next 1 day."

    def test_runs_out_before_delivery(self, make_item, today):
        item = make_item(current_stock=3, requirement_per_recipe=1, recipes_today=3, lead_time=5)
        result = evaluate_stock(item, today)

        assert result.daily_requirement == 3
        assert result.stock_duration_days == 1
        assert result.status == StockStatus.URGENT
        assert result.recommendation.startswith("Reorder now!")

    def test_plenty_of_stock(self, make_item, today):
        item = make_item(current_stock=100, requirement_per_recipe=1, recipes_today=10, lead_time=3)
        result = evaluate_stock(item, today)

        assert result.status == StockStatus.SAFE
        assert result.recommendation == "Stock is sufficient. The ideal time to order is in 7 days."

    @pytest.mark.parametrize(
        "overrides",
        [
            {"recipes_today": 0},
            {"requirement_per_recipe": 0},
            {"recipes_today": 0, "current_stock": 0, "lead_time": 30},
        ],
    )
    def test_no_usage_is_always_safe(self, make_item, today, overrides):
        item = make_item(**overrides)
        result = evaluate_stock(item, today)

        assert result.status == StockStatus.SAFE
        assert result.stock_duration_days == math.inf
        assert result.recommendation == "No daily usage, stock is safe."
        assert result.predicted_empty_date is None

    def test_empty_stock_with_usage_is_urgent(self, make_item, today):
        item = make_item(current_stock=0, lead_time=0)
        assert evaluate_stock(item, today).status == StockStatus.URGENT


class TestBoundaries:
    def test_duration_equal_to_lead_time_is_urgent(self, make_item):
        item = make_item(current_stock=4, requirement_per_recipe=1, recipes_today=1, lead_time=4)
        assert get_stock_status(item) == StockStatus.URGENT

    def test_duration_equal_to_reorder_point_is_warning(self, make_item):
        item = make_item(current_stock=6, requirement_per_recipe=1, recipes_today=1, lead_time=4)
        assert get_stock_status(item) == StockStatus.WARNING

    def test_just_past_reorder_point_is_safe(self, make_item):
        item = make_item(current_stock=6.5, requirement_per_recipe=1, recipes_today=1, lead_time=4)
        assert get_stock_status(item) == StockStatus.SAFE

    def test_safety_margin_is_a_parameter(self, make_item, today):
        item = make_item(current_stock=50, requirement_per_recipe=0.5, recipes_today=20, lead_time=3)

        assert get_stock_status(item, safety_margin_days=0) == StockStatus.SAFE
        assert evaluate_stock(item, today, safety_margin_days=0).status == StockStatus.SAFE
        assert get_stock_status(item, safety_margin_days=2) == StockStatus.WARNING


@pytest.mark.parametrize(
    "stock,per_recipe,recipes,lead",
    [
        (0, 1, 1, 0),
        (1, 1, 1, 0),
        (10, 2, 3, 1),
        (12, 0.5, 8, 3),
        (7.5, 0.25, 6, 5),
        (100, 1, 1, 100),
        (103, 1, 1, 100),
        (3, 0.3, 10, 2),
    ],
)
def test_status_matches_duration_bands(make_item, today, stock, per_recipe, recipes, lead):
    item = make_item(
        current_stock=stock, requirement_per_recipe=per_recipe, recipes_today=recipes, lead_time=lead
    )
    result = evaluate_stock(item, today)
    duration = result.stock_duration_days

    if duration <= lead:
        expected = StockStatus.URGENT
    elif duration <= lead + 2:
        expected = StockStatus.WARNING
    else:
        expected = StockStatus.SAFE
    assert result.status == expected
    assert get_stock_status(item) == result.status


class TestPredictedEmptyDate:
    def test_adds_whole_days(self, make_item, today):
        item = make_item(current_stock=5, requirement_per_recipe=0.1, recipes_today=20)
        assert predicted_empty_date(item, today) == today + timedelta(days=2)

    def test_empty_stock_runs_out_today(self, make_item, today):
        item = make_item(current_stock=0)
        assert predicted_empty_date(item, today) == today

    def test_none_without_usage(self, make_item, today):
        item = make_item(recipes_today=0)
        assert predicted_empty_date(item, today) is None

    def test_consistent_with_evaluation(self, make_item, today):
        item = make_item(current_stock=37, requirement_per_recipe=1.5, recipes_today=4)
        result = evaluate_stock(item, today)

        expected = today + timedelta(days=math.floor(result.stock_duration_days))
        assert result.predicted_empty_date == expected

    def test_depends_only_on_given_day(self, make_item, today):
        item = make_item(current_stock=10, requirement_per_recipe=1, recipes_today=1)
        later = today + timedelta(days=30)
        assert predicted_empty_date(item, later) - predicted_empty_date(item, today) == timedelta(days=30)

    def test_beyond_calendar_is_none(self, make_item, today):
        item = make_item(current_stock=1e12, requirement_per_recipe=0.001, recipes_today=1)
        assert predicted_empty_date(item, today) is None
        assert evaluate_stock(item, today).status == StockStatus.SAFE


def test_duration_overflowing_to_infinity_is_safe(make_item, today):
    item = make_item(current_stock=1e300, requirement_per_recipe=1e-10, recipes_today=1, lead_time=3)
    result = evaluate_stock(item, today)

    assert result.stock_duration_days == math.inf
    assert result.status == StockStatus.SAFE
    assert result.predicted_empty_date is None
