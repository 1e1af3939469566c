"""
Unit tests for progress/score aggregation.
"""

import pytest

from drillcards.delivery.stats import Ratio, aggregate_progress, aggregate_score


class TestRatio:
    """Test the Ratio value type."""

    def test_defined(self):
        ratio = Ratio(2, 6)

        assert ratio.is_defined
        assert ratio.value == pytest.approx(1 / 3)
        assert ratio.render() == "33%"

    def test_undefined(self):
        ratio = Ratio(0, 0)

        assert not ratio.is_defined
        assert ratio.value is None
        assert ratio.render() == "--"

    def test_custom_placeholder(self):
        assert Ratio(0, 0).render(placeholder="n/a") == "n/a"

    def test_full(self):
        assert Ratio(3, 3).value == 1.0
        assert Ratio(3, 3).render() == "100%"


class TestAggregate:
    """Test aggregate_progress() and aggregate_score()."""

    def test_progress_sums_achieved_over_thresholds(self, scheduler, make_item):
        items = [
            make_item(hits=2, misses=1, hit_streak=2),  # 2/6
            make_item(hits=5, misses=0, hit_streak=5),  # 3/3
        ]
        assert aggregate_progress(items, scheduler) == Ratio(5, 9)

    def test_progress_without_items_is_undefined(self, scheduler):
        ratio = aggregate_progress([], scheduler)

        assert ratio.value is None
        assert ratio.render() == "--"

    def test_fresh_deck_progress_is_zero(self, scheduler, make_item):
        ratio = aggregate_progress([make_item(), make_item()], scheduler)

        assert ratio == Ratio(0, 6)
        assert ratio.value == 0.0

    def test_score(self, make_item):
        items = [
            make_item(hits=2, misses=1),
            make_item(),
        ]
        assert aggregate_score(items) == Ratio(2, 3)

    def test_score_before_any_answer_is_undefined(self, make_item):
        assert aggregate_score([make_item()]).value is None
        assert aggregate_score([]).value is None
