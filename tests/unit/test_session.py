"""
Unit tests for SessionController turn-taking.

Uses FakeTaskScheduler so the auto-advance fires only when a test says so.
"""

import pytest

from drillcards.delivery import SessionController
from drillcards.delivery.stats import Ratio


@pytest.fixture
def controller(library, presenter, timers, scheduler):
    controller = SessionController(
        library,
        presenter,
        timers,
        scheduler=scheduler,
        advance_delay=3.0,
    )
    controller.begin()
    return controller


class TestBegin:
    """Test begin() and process_deck_change()."""

    def test_options_populated(self, controller, presenter):
        assert presenter.options == ["Persian", "Numbers"]

    def test_first_item_presented(self, controller, presenter):
        assert controller.items_shown == 1
        assert len(controller.items) == 3
        assert presenter.questions == [controller.current_item]
        assert controller.current_item.last_shown_time == 1

    def test_stats_published(self, controller, presenter):
        assert presenter.progress[-1] == Ratio(0, 9)
        assert presenter.scores[-1].value is None

    def test_unknown_deck(self, library, timers, make_presenter):
        controller = SessionController(library, make_presenter(deck_name="Klingon"), timers)
        with pytest.raises(KeyError):
            controller.begin()


class TestProcessInput:
    """Test process_input()."""

    def test_correct_answer(self, controller, presenter, timers):
        item = controller.current_item
        controller.process_input(item.answer)

        assert presenter.answers == [(item, True)]
        assert item.hits == 1
        assert controller.advance_pending
        assert len(timers.pending) == 1
        assert timers.pending[0].delay == 3.0

    def test_evaluation_does_not_advance_clock(self, controller):
        controller.process_input("wrong")
        assert controller.items_shown == 1

    def test_wrong_answer(self, controller, presenter):
        item = controller.current_item
        controller.process_input("definitely wrong")

        assert presenter.answers == [(item, False)]
        assert item.misses == 1
        assert presenter.scores[-1] == Ratio(0, 1)
        assert presenter.progress[-1] == Ratio(0, 12)

    def test_deferred_advance(self, controller, presenter, timers):
        controller.process_input("wrong")
        timers.pending[0].fire()

        assert controller.items_shown == 2
        assert len(presenter.questions) == 2
        assert not controller.advance_pending

    def test_submission_while_pending_advances_immediately(self, controller, presenter, timers):
        controller.process_input("wrong")
        task = timers.pending[0]

        controller.process_input("hello")

        assert task.cancelled
        assert controller.items_shown == 2
        assert len(presenter.questions) == 2
        assert len(presenter.answers) == 1
        # The submission that forced the advance is not evaluated
        assert sum(i.attempts for i in controller.items) == 1

    def test_empty_input_is_noop(self, controller, presenter, timers):
        controller.process_input("")

        assert presenter.answers == []
        assert timers.tasks == []
        assert controller.items_shown == 1

    def test_empty_input_while_pending_advances(self, controller, timers):
        controller.process_input("wrong")
        controller.process_input("")

        assert timers.tasks[0].cancelled
        assert controller.items_shown == 2

    def test_one_pending_task_at_a_time(self, controller, timers):
        for _ in range(5):
            controller.process_input("wrong")
            assert len(timers.pending) == 1
            controller.process_input("")
            assert len(timers.pending) == 0

    def test_close_cancels_pending(self, controller, timers):
        controller.process_input("wrong")
        controller.close()

        assert timers.tasks[0].cancelled
        assert not controller.advance_pending


class TestDeckChange:
    """Test deck/orientation changes mid-session."""

    def test_switch_deck_cancels_pending_advance(self, controller, presenter, timers):
        controller.process_input("wrong")
        task = timers.pending[0]

        presenter.deck_name = "Numbers"
        controller.process_deck_change()

        assert task.cancelled
        assert controller.items_shown == 1
        assert [i.question for i in controller.items] == ["yek", "do"]

        # A stale fire is ignored
        task.fire()
        assert controller.items_shown == 1

    def test_items_rebuilt_fresh(self, controller, presenter):
        controller.process_input(controller.current_item.answer)
        controller.process_deck_change()

        assert sum(i.hits for i in controller.items) == 0
        assert presenter.scores[-1].value is None

    def test_flip_orientation(self, controller, presenter):
        presenter.front_selected = False
        controller.process_deck_change()

        assert [i.question for i in controller.items] == ["hello", "book", "night"]
        assert controller.current_item.question in {"hello", "book", "night"}


class TestSessionFlow:
    """Longer runs through the controller."""

    def _answer(self, controller, timers, correct):
        item = controller.current_item
        controller.process_input(item.answer if correct else "wrong")
        timers.pending[0].fire()

    def test_no_repeat_within_cooldown(self, controller, timers):
        shown = [controller.current_item]
        for _ in range(2):
            self._answer(controller, timers, correct=True)
            shown.append(controller.current_item)

        assert len({id(i) for i in shown}) == 3

    def test_invariants_hold(self, controller, timers):
        for turn in range(40):
            self._answer(controller, timers, correct=turn % 3 != 0)

            for item in controller.items:
                assert item.hit_streak <= item.hits
                assert item.last_shown_time <= controller.items_shown

        assert controller.items_shown == 41

    def test_mastered_deck_keeps_presenting(self, controller, timers):
        for _ in range(30):
            self._answer(controller, timers, correct=True)

        assert all(i.hit_streak >= 3 for i in controller.items)
        assert controller.progress == Ratio(9, 9)
        assert controller.current_item is not None
