"""
Observation / action encoding for learning agents.

Observations are flat float32 vectors of the state visible to one seat:
its own hand, the current trick, both team piles, the trump marker and the
public round facts. Actions are card indices 0..39 (one per card of the deck);
the legal-action mask marks the cards of the current hand that may be played.

Positions in the trick are encoded relative to the observing seat, so seat 0
and seat 2 see the same layout for "me / next / partner / previous".
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Protocol, Sequence

import numpy as np

from .agents import _TakeEverythingMixin
from .deck import NUM_CARDS, RANKS, TOTAL_CARD_POINTS, Card, Suit
from .errors import IllegalCard
from .game import Board
from .play import NUM_PLAYERS, team_of

NUM_CARD_ACTIONS: int = NUM_CARDS
NUM_SUITS: int = len(Suit)
_MAX_DECK_AFTER_DEAL: float = 15.0
# hand + 4 trick slots + own pile + other pile + marker
_CARD_BLOCKS: int = 8
OBS_DIM: int = _CARD_BLOCKS * NUM_CARDS + 2 * NUM_SUITS + 2 * NUM_PLAYERS + 3


def card_index(card: Card) -> int:
    """Stable index 0..39, suit-major then rank order, matching make_deck_40()."""
    return int(card.suit) * len(RANKS) + RANKS.index(card.rank)


def index_card(index: int) -> Card:
    """Inverse of card_index."""
    if not 0 <= index < NUM_CARDS:
        raise ValueError(f"Card index {index} out of range 0..{NUM_CARDS - 1}")
    suit, pos = divmod(index, len(RANKS))
    return Card(Suit(suit), RANKS[pos])


def encode_card_set(cards: Iterable[Card]) -> np.ndarray:
    """Binary 40-dim vector: 1 where the card is present."""
    vec = np.zeros(NUM_CARDS, dtype=np.float32)
    for c in cards:
        vec[card_index(c)] = 1.0
    return vec


def _one_hot(index: int | None, size: int) -> np.ndarray:
    vec = np.zeros(size, dtype=np.float32)
    if index is not None and 0 <= index < size:
        vec[index] = 1.0
    return vec


def encode_observation(board: Board, seat: int) -> np.ndarray:
    """
    Play observation for ``seat``:

    - 8 × 40 card bits:
        hand, trick slot of each seat relative to ``seat`` (4 blocks),
        own team pile, other team pile, trump marker (zeros once handed out)
    - trump suit one-hot (4), declared suits (4)
    - seat one-hot (4), trick leader relative to ``seat`` (4)
    - deck fraction left, own score, other score (scaled by the deck's 120 points)
    """
    own_team = team_of(seat)
    blocks: List[np.ndarray] = [encode_card_set(board.hand(seat))]
    for k in range(NUM_PLAYERS):
        card = board.trick.slots[(seat + k) % NUM_PLAYERS]
        blocks.append(encode_card_set([card] if card is not None else []))
    blocks.append(encode_card_set(board.team_pile(own_team)))
    blocks.append(encode_card_set(board.team_pile(1 - own_team)))
    blocks.append(encode_card_set([board.trump_card] if board.trump_card is not None else []))

    declared = np.zeros(NUM_SUITS, dtype=np.float32)
    for suit in board.declared:
        declared[int(suit)] = 1.0

    meta = np.array(
        [
            board.deck_size() / _MAX_DECK_AFTER_DEAL,
            board.score[own_team] / float(TOTAL_CARD_POINTS),
            board.score[1 - own_team] / float(TOTAL_CARD_POINTS),
        ],
        dtype=np.float32,
    )
    obs = np.concatenate(
        blocks
        + [
            _one_hot(int(board.trump_suit), NUM_SUITS),
            declared,
            _one_hot(seat, NUM_PLAYERS),
            _one_hot((board.trick.leader - seat) % NUM_PLAYERS, NUM_PLAYERS),
            meta,
        ]
    )
    assert obs.shape == (OBS_DIM,)
    return obs


def legal_action_mask(board: Board) -> np.ndarray:
    """Boolean mask of shape (40,): True for every legal card of the current seat."""
    mask = np.zeros(NUM_CARD_ACTIONS, dtype=bool)
    for c in board.legal_cards():
        mask[card_index(c)] = True
    return mask


def hand_index_for_action(board: Board, action: int) -> int:
    """Map a card action back to its index in the current hand."""
    card = index_card(action) if 0 <= action < NUM_CARD_ACTIONS else None
    hand = board.current_hand()
    if card is None or card not in hand:
        raise IllegalCard(f"Action {action} is not a card in the current hand")
    return hand.index(card)


class MaskedPolicy(Protocol):
    """Decision policy on flat observations: ``act(obs, legal_actions_mask) -> action_index``."""

    def act(self, obs: Sequence[float], legal_actions_mask: Iterable[bool]) -> int:
        ...


@dataclass
class MaskedPolicyAdapter(_TakeEverythingMixin):
    """
    Plug an observation/mask policy into the round driver.

    Card choice goes through ``encode_observation`` and ``legal_action_mask``;
    post-trick it takes every declaration and the exchange when available.
    """

    policy: Any

    def choose_card(self, board: Board) -> int:
        obs = encode_observation(board, board.current_seat)
        action = self.policy.act(obs, legal_action_mask(board))
        return hand_index_for_action(board, int(action))


__all__ = [
    "NUM_CARD_ACTIONS",
    "OBS_DIM",
    "card_index",
    "index_card",
    "encode_card_set",
    "encode_observation",
    "legal_action_mask",
    "hand_index_for_action",
    "MaskedPolicy",
    "MaskedPolicyAdapter",
]
