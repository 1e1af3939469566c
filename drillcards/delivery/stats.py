"""
Session Progress and Score.

Both figures are sums over every item in the active deck, expressed as a
ratio. A zero denominator (empty deck, nothing answered yet) yields an
undefined ratio that renders as a placeholder instead of failing.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .review_item import ReviewItem
from .scheduler import ReviewScheduler

PLACEHOLDER = "--"


@dataclass(frozen=True)
class Ratio:
    """A numerator/denominator pair that may be undefined."""

    numerator: int
    denominator: int

    @property
    def is_defined(self) -> bool:
        return self.denominator > 0

    @property
    def value(self) -> float | None:
        """Ratio in [0, 1], or None when undefined."""
        if not self.is_defined:
            return None
        return self.numerator / self.denominator

    def render(self, placeholder: str = PLACEHOLDER) -> str:
        """Percentage string, e.g. '33%', or the placeholder."""
        value = self.value
        if value is None:
            return placeholder
        return f"{value * 100:.0f}%"


def aggregate_progress(items: Iterable[ReviewItem], scheduler: ReviewScheduler) -> Ratio:
    """Achieved streak over mastery thresholds, summed across items."""
    achieved = 0
    total = 0
    for item in items:
        progress = scheduler.progress(item)
        achieved += progress.achieved
        total += progress.threshold
    return Ratio(achieved, total)


def aggregate_score(items: Iterable[ReviewItem]) -> Ratio:
    """Hits over attempts, summed across items."""
    hits = 0
    attempts = 0
    for item in items:
        hits += item.hits
        attempts += item.attempts
    return Ratio(hits, attempts)
