"""
Session Controller: turn-taking for a drill session.

show question -> accept input -> evaluate -> auto-advance after a delay

Composes the ReviewScheduler and the answer matcher (through
ReviewItem.guess) and owns the single pending advance task. All
rendering goes through a Presenter, so sessions run headless in tests.
"""

from __future__ import annotations

from typing import Protocol

from loguru import logger

from .deck_library import DeckLibrary
from .review_item import ReviewItem
from .scheduler import ReviewScheduler
from .stats import Ratio, aggregate_progress, aggregate_score
from .timers import DeferredTask, TaskScheduler

DEFAULT_ADVANCE_DELAY = 3.0


class Presenter(Protocol):
    """Presentation collaborator driven by the controller."""

    def show_question(self, item: ReviewItem) -> None:
        """Show the prompt side and clear any previous answer."""
        ...

    def show_answer(self, item: ReviewItem, success: bool) -> None:
        """Reveal the answer, the secondary answer and the verdict."""
        ...

    def set_options(self, deck_names: list[str]) -> None:
        ...

    def set_progress(self, ratio: Ratio) -> None:
        ...

    def set_score(self, ratio: Ratio) -> None:
        ...

    def current_option(self) -> str:
        """Name of the selected deck."""
        ...

    def is_front_selected(self) -> bool:
        ...


class SessionController:
    """
    Orchestrates one review session.

    The logical clock `items_shown` counts presentations and is the only
    notion of time the scheduler sees. At most one advance task is pending;
    a submission while it is pending cancels it and advances at once.
    """

    def __init__(
        self,
        library: DeckLibrary,
        presenter: Presenter,
        timers: TaskScheduler,
        scheduler: ReviewScheduler | None = None,
        advance_delay: float = DEFAULT_ADVANCE_DELAY,
    ):
        """
        Initialize the controller.

        Args:
            library: Decks to choose from
            presenter: Rendering/selection collaborator
            timers: Source of the cancellable advance task
            scheduler: ReviewScheduler (creates default if None)
            advance_delay: Seconds between an answer and the next question
        """
        self.library = library
        self.presenter = presenter
        self.timers = timers
        self.scheduler = scheduler or ReviewScheduler()
        self.advance_delay = advance_delay

        self._items: list[ReviewItem] = []
        self._items_shown = 0
        self._current: ReviewItem | None = None
        self._pending: DeferredTask | None = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def items(self) -> list[ReviewItem]:
        return self._items

    @property
    def items_shown(self) -> int:
        return self._items_shown

    @property
    def current_item(self) -> ReviewItem | None:
        return self._current

    @property
    def advance_pending(self) -> bool:
        return self._pending is not None

    @property
    def progress(self) -> Ratio:
        return aggregate_progress(self._items, self.scheduler)

    @property
    def score(self) -> Ratio:
        return aggregate_score(self._items)

    # -------------------------------------------------------------------------
    # Presentation -> core
    # -------------------------------------------------------------------------

    def begin(self) -> None:
        """Populate the deck selector and present the first item."""
        self.presenter.set_options(self.library.names)
        self.process_deck_change()

    def process_deck_change(self) -> None:
        """
        Rebuild items from the selected deck and orientation.

        Resets the clock and immediately presents a first item. Any pending
        advance is cancelled first so it cannot fire against the new deck.
        """
        self._cancel_pending()

        name = self.presenter.current_option()
        front_selected = self.presenter.is_front_selected()
        deck = self.library.get(name)

        self._items = deck.build_items(front_selected)
        self._items_shown = 0
        self._current = None

        logger.info(
            f"Deck '{name}' selected ({len(self._items)} items, "
            f"{'front' if front_selected else 'back'} side as prompt)"
        )

        self._publish_stats()
        self._show_next()

    def process_input(self, response: str) -> None:
        """
        Handle a submission.

        With an advance pending, any submission (even empty) advances
        immediately and its text is ignored. Otherwise an empty response is
        a no-op and anything else is evaluated.
        """
        if self._pending is not None:
            self._cancel_pending()
            self._show_next()
            return

        if response != "":
            self._guess(response)

    def close(self) -> None:
        """End the session, dropping any pending advance."""
        self._cancel_pending()

    # -------------------------------------------------------------------------
    # Turn-taking
    # -------------------------------------------------------------------------

    def _show_next(self) -> None:
        self._items_shown += 1
        item = self.scheduler.pick_next(self._items, self._items_shown)
        item.last_shown_time = self._items_shown
        self._current = item
        self._pending = None
        self.presenter.show_question(item)

    def _guess(self, response: str) -> None:
        item = self._current
        if item is None:
            logger.warning("Input received before any item was shown")
            return

        success = item.guess(response)
        logger.debug(
            f"Response {response!r} for {item.question!r}: "
            f"{'hit' if success else 'miss'} (streak={item.hit_streak})"
        )

        self.presenter.show_answer(item, success)
        self._publish_stats()

        self._pending = self.timers.schedule(self.advance_delay, self._advance)
        logger.debug(f"Advance scheduled in {self.advance_delay}s")

    def _advance(self) -> None:
        """Deferred task body."""
        self._pending = None
        self._show_next()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
            logger.debug("Pending advance cancelled")

    def _publish_stats(self) -> None:
        self.presenter.set_progress(self.progress)
        self.presenter.set_score(self.score)
