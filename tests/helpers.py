"""Deterministic board setups shared by the engine tests."""
from __future__ import annotations

from guinyot.deck import Card, Deck, make_deck_40
from guinyot.game import HAND_SIZE, Board
from guinyot.play import NUM_PLAYERS

MARKER_POSITION = HAND_SIZE * NUM_PLAYERS


def stacked_deck(hands: dict[int, list[Card]] | None = None, marker: Card | None = None) -> Deck:
    """
    Full 40-card deck ordered so that, dealing from seat 0, seat ``s`` receives
    ``hands[s]`` first and the trump marker is ``marker``. Everything else keeps
    make_deck_40() order.
    """
    hands = hands or {}
    order: list[Card | None] = [None] * 40
    placed: set[Card] = set()
    for seat, cards in hands.items():
        for j, card in enumerate(cards):
            order[j * NUM_PLAYERS + seat] = card
            placed.add(card)
    if marker is not None:
        order[MARKER_POSITION] = marker
        placed.add(marker)
    rest = iter(c for c in make_deck_40() if c not in placed)
    return Deck(cards=[c if c is not None else next(rest) for c in order])


def stacked_board(hands: dict[int, list[Card]] | None = None, marker: Card | None = None) -> Board:
    return Board(starting_seat=0, deck=stacked_deck(hands, marker))


def assert_conserved(board: Board) -> None:
    cards = board.all_cards()
    assert len(cards) == 40
    assert set(cards) == set(make_deck_40())
