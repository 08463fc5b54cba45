"""
Trick-taking: legal moves and trick winner.
Draw phase: any card. Arrastre (deck empty): follow suit, beat the opponents'
winning card if possible, otherwise trump over it if possible.
"""
from __future__ import annotations

from .deck import Card, Suit

NUM_PLAYERS = 4


def team_of(seat: int) -> int:
    """Seats 0 and 2 form team 0, seats 1 and 3 team 1."""
    return seat % 2


def winning_play(trick: list[tuple[int, Card]], trump_suit: Suit) -> tuple[int, Card]:
    """
    (seat, card) currently winning a non-empty trick.
    trick: list of (seat, card) in the order played, leader first.
    """
    best_seat, best_card = trick[0]
    for seat, card in trick[1:]:
        if card.is_better_than(best_card, trump_suit):
            best_seat, best_card = seat, card
    return best_seat, best_card


def trick_winner(trick: list[tuple[int, Card]], trump_suit: Suit) -> int:
    """Seat (0..3) that wins the trick."""
    return winning_play(trick, trump_suit)[0]


def cards_of_suit(hand: list[Card], suit: Suit) -> list[Card]:
    return [c for c in hand if c.suit == suit]


def cards_beating(hand: list[Card], card: Card, trump_suit: Suit) -> list[Card]:
    return [c for c in hand if c.is_better_than(card, trump_suit)]


def legal_plays(
    hand: list[Card],
    trick: list[tuple[int, Card]],
    seat: int,
    trump_suit: Suit,
    must_follow: bool,
) -> list[Card]:
    """
    Return list of cards ``seat`` can legally play from ``hand``.

    must_follow is True once the deck is exhausted. While leading, or before
    that, every card is legal. Otherwise:
      - partner winning: follow the led suit if possible;
      - opponent winning: beat within the led suit, else follow, else trump
        over the winning card, else anything.
    """
    if not must_follow or not trick:
        return list(hand)

    led_suit = trick[0][1].suit
    win_seat, win_card = winning_play(trick, trump_suit)
    same = cards_of_suit(hand, led_suit)

    if team_of(win_seat) == team_of(seat):
        return same if same else list(hand)

    higher = [c for c in same if c.is_better_than(win_card, trump_suit)]
    if higher:
        return higher
    if same:
        return same
    over = cards_beating(hand, win_card, trump_suit)
    if over:
        return over
    return list(hand)


__all__ = [
    "NUM_PLAYERS",
    "team_of",
    "winning_play",
    "trick_winner",
    "cards_of_suit",
    "cards_beating",
    "legal_plays",
]
