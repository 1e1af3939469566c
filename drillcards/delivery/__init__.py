"""
Drill delivery: adaptive flashcard review.

Components:
- matcher: Tolerant answer matching and transliteration
- ReviewItem: Per-card counters and accepted answers
- DeckLibrary: YAML deck loading
- ReviewScheduler: Tier classification and next-item selection
- Ratio: Progress and score aggregation
- SessionController: Turn-taking with a cancellable auto-advance
"""

from .deck_library import Deck, DeckCard, DeckLibrary, DeckLoadError
from .matcher import SUBSTITUTIONS, TRANSLITERATIONS, matches, transliterate
from .review_item import NEVER_SHOWN, ReviewItem
from .scheduler import (
    ItemState,
    NoItemsAvailableError,
    Progress,
    ReviewScheduler,
    SchedulerConfig,
)
from .session import Presenter, SessionController
from .stats import Ratio, aggregate_progress, aggregate_score
from .timers import AsyncioTaskScheduler, DeferredTask, TaskScheduler

__all__ = [
    # Matching
    "matches",
    "transliterate",
    "SUBSTITUTIONS",
    "TRANSLITERATIONS",
    # Items and decks
    "ReviewItem",
    "NEVER_SHOWN",
    "Deck",
    "DeckCard",
    "DeckLibrary",
    "DeckLoadError",
    # Scheduling
    "ItemState",
    "Progress",
    "ReviewScheduler",
    "SchedulerConfig",
    "NoItemsAvailableError",
    # Stats
    "Ratio",
    "aggregate_progress",
    "aggregate_score",
    # Session
    "Presenter",
    "SessionController",
    "AsyncioTaskScheduler",
    "DeferredTask",
    "TaskScheduler",
]
