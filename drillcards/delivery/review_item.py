"""
Review Item: a single drillable card with its mastery counters.

Built from a deck card plus an orientation flag. Holds the prompt,
the canonical answer, every accepted alternate, and the hit/miss
counters the scheduler reads.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .matcher import matches, transliterate

if TYPE_CHECKING:
    from .deck_library import DeckCard

NEVER_SHOWN = -1


@dataclass
class ReviewItem:
    """
    One flashcard-equivalent unit.

    `acceptable_answers[0]` is the canonical answer. Counters start at zero
    and `last_shown_time` stays at NEVER_SHOWN until the first presentation.
    """

    question: str
    answer: str
    acceptable_answers: tuple[str, ...]
    secondary_answer: str = ""

    # Counters
    hits: int = 0
    misses: int = 0
    hit_streak: int = 0
    last_shown_time: int = NEVER_SHOWN

    @classmethod
    def from_sides(
        cls,
        prompt: Sequence[Any],
        answers: Sequence[Any],
        romanized: bool = False,
    ) -> ReviewItem:
        """
        Create an item from a prompt side and an answer side.

        Every value is coerced to str before it can be compared. When the
        answers are romanized, their casual spellings become the secondary
        answer.
        """
        acceptable = tuple(str(a) for a in answers)
        answer = acceptable[0]
        return cls(
            question=str(prompt[0]),
            answer=answer,
            acceptable_answers=acceptable,
            secondary_answer=_secondary_answer(answer, acceptable) if romanized else "",
        )

    @classmethod
    def from_card(
        cls,
        card: DeckCard,
        front_selected: bool,
        romanized: bool = False,
    ) -> ReviewItem:
        """Create an item, asking front -> back or back -> front."""
        if front_selected:
            return cls.from_sides(card.front, card.back, romanized=romanized)
        return cls.from_sides(card.back, card.front, romanized=romanized)

    @property
    def is_fresh(self) -> bool:
        """Whether the item has never been presented."""
        return self.last_shown_time == NEVER_SHOWN

    @property
    def attempts(self) -> int:
        return self.hits + self.misses

    def guess(self, response: str) -> bool:
        """
        Evaluate a response and update the counters.

        Returns:
            True if the response matches any acceptable answer
        """
        success = any(matches(response, a) for a in self.acceptable_answers)

        if success:
            self.hits += 1
            self.hit_streak += 1
        else:
            self.misses += 1
            self.hit_streak = 0

        return success


def _secondary_answer(answer: str, acceptable: Sequence[str]) -> str:
    """Casual spellings of the accepted answers that differ from `answer`."""
    seen: list[str] = []
    for value in acceptable:
        rendered = transliterate(value)
        if rendered != answer and rendered not in seen:
            seen.append(rendered)
    return ", ".join(seen)
