"""
Guinyot deck: 40 Spanish-suited cards (4 suits × 10 ranks).
Card values for counting: 1=11, 3=10, 12=4, 10=3, 11=2, others 0 (120 per deck).
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional


class Suit(IntEnum):
    """Oros, Copes, Espases, Bastos. No ordering between suits is used by the rules."""
    ORUS = 0
    COPES = 1
    ESPASES = 2
    BASTOS = 3


# Ranks present in the 40-card deck (no 8s or 9s).
RANKS: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 10, 11, 12)

RANK_AS = 1
RANK_TRES = 3
RANK_SET = 7
RANK_SOTA = 10
RANK_CAVALL = 11
RANK_REI = 12

CARD_POINTS: dict[int, int] = {
    RANK_AS: 11,
    RANK_TRES: 10,
    RANK_REI: 4,
    RANK_SOTA: 3,
    RANK_CAVALL: 2,
}

NUM_CARDS: int = len(Suit) * len(RANKS)
TOTAL_CARD_POINTS: int = 120


@dataclass(frozen=True)
class Card:
    """A single card: suit + rank (one of RANKS)."""

    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank {self.rank}; must be one of {RANKS}")

    def point_value(self) -> int:
        return CARD_POINTS.get(self.rank, 0)

    def is_better_than(self, other: Card, trump_suit: Suit) -> bool:
        """
        True if this card beats ``other`` when both sit in the same trick.

        Same suit: higher point value wins, ties broken by the higher rank numeral.
        Different suits: only a trump beats a non-trump; a card that neither
        follows nor trumps never wins.
        """
        if self.suit == other.suit:
            return (self.point_value(), self.rank) > (other.point_value(), other.rank)
        return self.suit == trump_suit

    def __str__(self) -> str:
        return f"{self.rank}{'OCEB'[self.suit]}"

    def __repr__(self) -> str:
        return str(self)


def make_deck_40() -> list[Card]:
    """Build the full 40-card deck, suit-major then rank order."""
    return [Card(suit, rank) for suit in Suit for rank in RANKS]


def cards_point_total(cards: Iterable[Card]) -> int:
    """Total points in a set of cards (120 for the whole deck)."""
    return sum(c.point_value() for c in cards)


class Deck:
    """Undealt cards. Drawing takes from the front; the deck is never refilled."""

    def __init__(self, rng: random.Random | None = None, cards: Iterable[Card] | None = None):
        if cards is None:
            self._cards = make_deck_40()
            (rng or random.Random()).shuffle(self._cards)
        else:
            self._cards = list(cards)

    def draw(self) -> Optional[Card]:
        """Remove and return the next card, or None once the deck is exhausted."""
        if not self._cards:
            return None
        return self._cards.pop(0)

    def is_empty(self) -> bool:
        return not self._cards

    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)
