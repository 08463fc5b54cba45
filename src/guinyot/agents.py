"""
Baseline agents and the policy interface used by the round driver.

A ``Policy`` only reads the board: it picks a hand index for the current seat
and, after a completed trick, says which declarations and whether the trump
exchange it wants. The driver submits those choices to the board.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Dict, List, Protocol

from .deck import Card, Suit
from .game import Board


class Policy(Protocol):
    """Strategy for one seat."""

    def choose_card(self, board: Board) -> int:
        """
        Hand index of the card to play for ``board.current_seat``.

        Implementations should pick among ``board.legal_cards()``; the board
        rejects anything else with IllegalCard.
        """

    def choose_declarations(self, board: Board, seat: int) -> List[Suit]:
        """Suits ``seat`` declares after a completed trick (may be empty)."""

    def wants_trump_exchange(self, board: Board, seat: int) -> bool:
        """True if ``seat`` swaps the trump 7 for the marker after a completed trick."""


def _index_in_hand(board: Board, card: Card) -> int:
    return board.current_hand().index(card)


class _TakeEverythingMixin:
    """Declare every available suit and exchange whenever allowed."""

    def choose_declarations(self, board: Board, seat: int) -> List[Suit]:
        return board.available_declarations(seat)

    def wants_trump_exchange(self, board: Board, seat: int) -> bool:
        return board.can_exchange_trump(seat)


@dataclass
class RandomAgent(_TakeEverythingMixin):
    """
    Baseline policy that plays a uniformly random legal card.

    Usage:
        agent = RandomAgent(seed=42)
        index = agent.choose_card(board)
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def choose_card(self, board: Board) -> int:
        legal = board.legal_cards()
        if not legal:
            raise ValueError("No legal cards available for RandomAgent")
        return _index_in_hand(board, self._rng.choice(legal))


@dataclass
class GreedyAgent(_TakeEverythingMixin):
    """Always plays the strongest legal card under the trump-aware comparator."""

    seed: int | None = None  # unused; keeps the factory signature uniform

    def choose_card(self, board: Board) -> int:
        legal = board.legal_cards()
        if not legal:
            raise ValueError("No legal cards available for GreedyAgent")
        trump = board.trump_suit
        best = reduce(lambda a, b: a if a.is_better_than(b, trump) else b, legal)
        return _index_in_hand(board, best)


AGENT_KINDS: Dict[str, Callable[..., Policy]] = {
    "random": RandomAgent,
    "greedy": GreedyAgent,
}


def make_agent(kind: str, seed: int | None = None) -> Policy:
    """Build a policy by registry name ("random", "greedy")."""
    try:
        factory = AGENT_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown agent kind {kind!r}; expected one of {sorted(AGENT_KINDS)}") from None
    return factory(seed=seed)


__all__ = ["Policy", "RandomAgent", "GreedyAgent", "AGENT_KINDS", "make_agent"]
