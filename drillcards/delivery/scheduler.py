"""
Adaptive Review Scheduler.

Classifies every item into a priority tier against the session's logical
clock (presentations so far) and picks the next item to show.

Tiers, highest priority first:
- NOW      - missed recently, due for spaced drill
- WHENEVER - answered correctly but not yet mastered
- FILLER   - mastered, used to pad the session
- NOT_NOW  - shown too recently to repeat

Drill spacing doubles with every consecutive hit (2, 4, 8 presentations)
and falls back to the shortest gap on a miss. A deck never runs out:
once nothing else is eligible, mastered items are recycled.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from .review_item import ReviewItem


class ItemState(Enum):
    """Scheduling tier of an item."""

    NOW = "now"
    WHENEVER = "whenever"
    FILLER = "filler"
    NOT_NOW = "not_now"


# Selection order
STATES_IN_ORDER = (ItemState.NOW, ItemState.WHENEVER, ItemState.FILLER, ItemState.NOT_NOW)


class NoItemsAvailableError(LookupError):
    """Raised when asked to pick from an empty item sequence."""


@dataclass
class SchedulerConfig:
    """Configuration for tier classification."""

    cooldown: int = 3  # Minimum presentations between repeats
    fresh_threshold: int = 3  # Streak that masters a never-missed item
    relapse_threshold: int = 6  # Streak that masters a missed item
    drill_streak: int = 3  # Streak that ends active drilling


@dataclass(frozen=True)
class Progress:
    """Mastery progress of one item."""

    achieved: int
    threshold: int

    @property
    def is_done(self) -> bool:
        return self.achieved >= self.threshold


class ReviewScheduler:
    """
    Classifies items and selects the next one.

    Classification is a pure function of an item and the clock value;
    the only state here is configuration and the random source used to
    break ties inside a tier.
    """

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the scheduler.

        Args:
            config: Custom configuration (uses defaults if None)
            rng: Random source for in-tier selection (seeded tests pass one)
        """
        self.config = config or SchedulerConfig()
        self.rng = rng or random.Random()

    def progress(self, item: ReviewItem) -> Progress:
        """Streak towards mastery, capped at the threshold."""
        if item.misses == 0:
            threshold = self.config.fresh_threshold
        else:
            threshold = self.config.relapse_threshold
        return Progress(min(item.hit_streak, threshold), threshold)

    def is_done(self, item: ReviewItem) -> bool:
        return self.progress(item).is_done

    def cooldown_active(self, item: ReviewItem, items_shown: int) -> bool:
        """
        Whether the item was shown within the last `cooldown` presentations.

        Never active for an item that has not been shown yet.
        """
        if item.is_fresh:
            return False
        return items_shown < item.last_shown_time + self.config.cooldown

    def classify(self, item: ReviewItem, items_shown: int) -> ItemState:
        """
        Place an item into a tier.

        Args:
            item: Item to classify
            items_shown: Current value of the session clock

        Returns:
            The item's ItemState
        """
        if self.is_done(item):
            if self.cooldown_active(item, items_shown):
                return ItemState.NOT_NOW
            return ItemState.FILLER

        if item.misses == 0 or item.hit_streak >= self.config.drill_streak:
            if self.cooldown_active(item, items_shown):
                return ItemState.NOT_NOW
            return ItemState.WHENEVER

        # Active drill: 2, 4, 8 ... presentations between repeats
        wait_period = 1 << (item.hit_streak + 1)
        ready_time = item.last_shown_time + wait_period

        if items_shown < ready_time:
            return ItemState.NOT_NOW
        return ItemState.NOW

    def partition(
        self,
        items: Sequence[ReviewItem],
        items_shown: int,
    ) -> dict[ItemState, list[ReviewItem]]:
        """Group items by tier, keeping item order within each tier."""
        by_state: dict[ItemState, list[ReviewItem]] = {state: [] for state in STATES_IN_ORDER}
        for item in items:
            by_state[self.classify(item, items_shown)].append(item)
        return by_state

    def pick_next(self, items: Sequence[ReviewItem], items_shown: int) -> ReviewItem:
        """
        Choose the next item to present.

        Takes the highest-priority non-empty tier and picks uniformly
        within it.

        Raises:
            NoItemsAvailableError: If `items` is empty
        """
        if not items:
            raise NoItemsAvailableError("No items available to schedule")

        by_state = self.partition(items, items_shown)

        for state in STATES_IN_ORDER:
            candidates = by_state[state]
            if candidates:
                logger.debug(
                    f"Picking from {state.name} ({len(candidates)} of {len(items)} items) "
                    f"at clock {items_shown}"
                )
                return self.rng.choice(candidates)

        # Every item lands in some tier
        raise AssertionError("unreachable")
