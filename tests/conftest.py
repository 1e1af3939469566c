"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from drillcards.delivery import DeckLibrary, ReviewItem, ReviewScheduler  # noqa: E402
from drillcards.delivery.stats import Ratio  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


# =============================================================================
# Fakes
# =============================================================================


class FakeTask:
    """Deferred task that only runs when a test fires it."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if self.cancelled or self.fired:
            return
        self.fired = True
        self.callback()


class FakeTaskScheduler:
    """TaskScheduler without a clock."""

    def __init__(self):
        self.tasks: list[FakeTask] = []

    def schedule(self, delay, callback):
        task = FakeTask(delay, callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[FakeTask]:
        return [t for t in self.tasks if not t.cancelled and not t.fired]


class RecordingPresenter:
    """Presenter that records every call."""

    def __init__(self, deck_name="Persian", front_selected=True):
        self.deck_name = deck_name
        self.front_selected = front_selected
        self.options: list[str] = []
        self.questions: list[ReviewItem] = []
        self.answers: list[tuple[ReviewItem, bool]] = []
        self.progress: list[Ratio] = []
        self.scores: list[Ratio] = []

    def show_question(self, item):
        self.questions.append(item)

    def show_answer(self, item, success):
        self.answers.append((item, success))

    def set_options(self, deck_names):
        self.options = list(deck_names)

    def set_progress(self, ratio):
        self.progress.append(ratio)

    def set_score(self, ratio):
        self.scores.append(ratio)

    def current_option(self):
        return self.deck_name

    def is_front_selected(self):
        return self.front_selected


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_decks():
    """Deck data as it comes out of the YAML loader."""
    return [
        {
            "name": "Persian",
            "cards": [
                {"front": ["salAm"], "back": ["hello", "hi"]},
                {"front": ["ketAb"], "back": ["book"]},
                {"front": ["Sab"], "back": ["night"]},
            ],
        },
        {
            "name": "Numbers",
            "cards": [
                {"front": ["yek"], "back": [1, "one"]},
                {"front": ["do"], "back": [2, "two"]},
            ],
        },
    ]


@pytest.fixture
def library(sample_decks):
    return DeckLibrary.from_data(sample_decks)


@pytest.fixture
def timers():
    return FakeTaskScheduler()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def make_presenter():
    return RecordingPresenter


@pytest.fixture
def scheduler():
    """Scheduler with a seeded random source."""
    return ReviewScheduler(rng=random.Random(1234))


@pytest.fixture
def make_item():
    """Factory for items with preset counters."""

    def _make(hits=0, misses=0, hit_streak=0, last_shown_time=-1, answer="ketAb"):
        return ReviewItem(
            question="book",
            answer=answer,
            acceptable_answers=(answer,),
            hits=hits,
            misses=misses,
            hit_streak=hit_streak,
            last_shown_time=last_shown_time,
        )

    return _make
