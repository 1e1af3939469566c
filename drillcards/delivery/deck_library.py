"""
Deck Library: Deck Definition Loader.

Loads the ordered deck list from a YAML file:

    - name: Greetings
      romanized: front
      cards:
        - front: [salAm, salam]
          back: [hello, hi]
        - front: xodAhAfez
          back: goodbye

Every scalar is read as the string written in the file, so `yes`, `no`
and `010` stay answers rather than becoming booleans or numbers.

Features:
- Validates structure with pydantic (non-empty sides, non-empty decks)
- Records which side holds the romanized text
- Builds ReviewItems for a deck in either orientation
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any, Literal

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .review_item import ReviewItem


class DeckLoadError(Exception):
    """Raised when a deck file cannot be read or is malformed."""


# =============================================================================
# Deck Models
# =============================================================================


class DeckCard(BaseModel):
    """A raw card: two groups of strings, canonical value first."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    front: tuple[str, ...] = Field(min_length=1)
    back: tuple[str, ...] = Field(min_length=1)

    @field_validator("front", "back", mode="before")
    @classmethod
    def _wrap_scalar(cls, value: Any) -> Any:
        if isinstance(value, (str, int, float)):
            return [value]
        return value


class Deck(BaseModel):
    """
    A named, ordered group of cards.

    `romanized` names the side written in the romanization the matcher
    understands. Only that side gets a casual spelling when it is the
    answer; "none" turns casual spellings off for the deck.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    romanized: Literal["front", "back", "none"] = "front"
    cards: list[DeckCard] = Field(min_length=1)

    def build_items(self, front_selected: bool) -> list[ReviewItem]:
        """Create fresh ReviewItems in card order."""
        answer_side = "back" if front_selected else "front"
        romanized = self.romanized == answer_side
        return [
            ReviewItem.from_card(card, front_selected, romanized=romanized)
            for card in self.cards
        ]


# =============================================================================
# Deck Library
# =============================================================================


class DeckLibrary:
    """
    Ordered collection of decks, addressable by name.

    Deck order is preserved from the source so selectors list decks the way
    the file lists them.
    """

    DEFAULT_DECK_FILE = Path("decks.yaml")

    def __init__(self, decks: Iterable[Deck]):
        self._decks: dict[str, Deck] = {}
        for deck in decks:
            if deck.name in self._decks:
                raise DeckLoadError(f"Duplicate deck name: {deck.name!r}")
            self._decks[deck.name] = deck

    @property
    def names(self) -> list[str]:
        """Deck names in source order."""
        return list(self._decks)

    def __len__(self) -> int:
        return len(self._decks)

    def __contains__(self, name: object) -> bool:
        return name in self._decks

    def get(self, name: str) -> Deck:
        """
        Look up a deck by name.

        Raises:
            KeyError: If no deck has that name
        """
        return self._decks[name]

    def get_stats(self) -> dict[str, int]:
        """Card count per deck."""
        return {name: len(deck.cards) for name, deck in self._decks.items()}

    @classmethod
    def from_data(cls, data: Any, source: str = "<data>") -> DeckLibrary:
        """
        Build a library from already-parsed deck data.

        Args:
            data: List of {name, cards} mappings
            source: Label used in error messages

        Raises:
            DeckLoadError: If the data does not describe a deck list
        """
        if not isinstance(data, list):
            raise DeckLoadError(f"{source}: expected a list of decks, got {type(data).__name__}")

        decks = []
        for index, raw in enumerate(data):
            try:
                decks.append(Deck.model_validate(raw))
            except ValidationError as e:
                raise DeckLoadError(f"{source}: invalid deck #{index + 1}: {e}") from e

        if not decks:
            raise DeckLoadError(f"{source}: no decks defined")

        return cls(decks)

    @classmethod
    def load(cls, path: Path | None = None) -> DeckLibrary:
        """
        Load decks from a YAML file.

        Args:
            path: Deck file (default: decks.yaml)

        Raises:
            DeckLoadError: If the file is missing, unreadable or malformed
        """
        path = path or cls.DEFAULT_DECK_FILE

        try:
            with open(path, encoding="utf-8") as f:
                # BaseLoader keeps every scalar as the written string
                data = yaml.load(f, Loader=yaml.BaseLoader)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load {path}: {e}")
            raise DeckLoadError(f"Failed to load {path}: {e}") from e

        library = cls.from_data(data, source=str(path))
        logger.info(f"DeckLibrary loaded: {len(library)} decks from {path}")
        return library
