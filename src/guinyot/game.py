"""
Single round orchestration: deal → tricks (draw phase, then arrastre) → score.
Declarations (cantes) and the trump 7 exchange happen between tricks.
"""
from __future__ import annotations

import logging
import random
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from .deck import RANK_REI, RANK_SET, RANK_SOTA, Card, Deck, Suit, cards_point_total
from .errors import (
    IllegalCard,
    IneligibleDeclaration,
    IneligibleTrumpExchange,
    InvalidHandIndex,
    InvalidSeat,
    RoundOver,
    RuleViolation,
)
from .play import NUM_PLAYERS, legal_plays, team_of, trick_winner

if TYPE_CHECKING:  # pragma: no cover - import cycle guard for type checking only
    from .agents import Policy

logger = logging.getLogger(__name__)

HAND_SIZE = 6
LAST_TRICK_BONUS = 10
DECLARATION_POINTS = 20
TRUMP_DECLARATION_POINTS = 40


class RoundOutcome(Enum):
    CONTINUATION = "continuation"
    TRICK_COMPLETED = "trick_completed"
    TEAM_0_WON = "team_0_won"
    TEAM_1_WON = "team_1_won"
    INVALID = "invalid"

    def is_terminal(self) -> bool:
        return self in (RoundOutcome.TEAM_0_WON, RoundOutcome.TEAM_1_WON, RoundOutcome.INVALID)


class Player:
    """One seat: its hand and team. Play removes by index, draw appends."""

    def __init__(self, seat: int):
        self.seat = seat
        self.hand: list[Card] = []

    @property
    def team(self) -> int:
        return team_of(self.seat)

    def add(self, card: Card) -> None:
        self.hand.append(card)

    def remove(self, index: int) -> Card:
        return self.hand.pop(index)

    def index_of(self, card: Card) -> int | None:
        for i, c in enumerate(self.hand):
            if c == card:
                return i
        return None

    def holds(self, card: Card) -> bool:
        return card in self.hand

    def __repr__(self) -> str:
        return f"Player(seat={self.seat}, hand={self.hand})"


class Trick:
    """Four slots indexed by seat; None marks a seat that has not played yet."""

    def __init__(self, leader: int):
        self.leader = leader
        self.slots: list[Card | None] = [None] * NUM_PLAYERS

    def place(self, seat: int, card: Card) -> None:
        assert self.slots[seat] is None, f"Seat {seat} already played in this trick"
        self.slots[seat] = card

    def plays(self) -> list[tuple[int, Card]]:
        """(seat, card) pairs in turn order, leader first."""
        out: list[tuple[int, Card]] = []
        for k in range(NUM_PLAYERS):
            seat = (self.leader + k) % NUM_PLAYERS
            card = self.slots[seat]
            if card is None:
                break
            out.append((seat, card))
        return out

    def cards(self) -> list[Card]:
        return [c for _, c in self.plays()]

    def is_empty(self) -> bool:
        return all(c is None for c in self.slots)

    def is_full(self) -> bool:
        return all(c is not None for c in self.slots)

    def reset(self, leader: int) -> None:
        self.leader = leader
        self.slots = [None] * NUM_PLAYERS

    def __len__(self) -> int:
        return sum(1 for c in self.slots if c is not None)


def _check_seat(seat: int) -> None:
    if not 0 <= seat < NUM_PLAYERS:
        raise InvalidSeat(f"Seat {seat} out of range 0..{NUM_PLAYERS - 1}")


def _as_suit(suit) -> Suit:
    try:
        return Suit(suit)
    except ValueError:
        raise IneligibleDeclaration(f"Unknown suit {suit!r}") from None


class Board:
    """
    Mutable state for one round: deck, trump marker, hands, current trick,
    team piles, declared suits and scores.

    Commands return a RoundOutcome or raise a RuleViolation; a rejected command
    leaves the board unchanged.
    """

    def __init__(
        self,
        starting_seat: int = 0,
        rng: random.Random | None = None,
        deck: Deck | None = None,
    ):
        _check_seat(starting_seat)
        self.deck = deck if deck is not None else Deck(rng=rng)
        self.players = [Player(seat) for seat in range(NUM_PLAYERS)]
        for _ in range(HAND_SIZE):
            for k in range(NUM_PLAYERS):
                card = self.deck.draw()
                if card is None:
                    raise ValueError("Deck too small to deal a round")
                self.players[(starting_seat + k) % NUM_PLAYERS].add(card)
        marker = self.deck.draw()
        if marker is None:
            raise ValueError("Deck too small to turn up a trump card")
        # Marker stays on the table until the last draw hands it out.
        self.trump_card: Optional[Card] = marker
        self.trump_suit: Suit = marker.suit

        self.current_seat: int = starting_seat
        self.trick = Trick(starting_seat)
        self.piles: tuple[list[Card], list[Card]] = ([], [])
        self.declared: set[Suit] = set()
        self.declarations: list[tuple[int, Suit, int]] = []  # (seat, suit, points)
        self.score: list[int] = [0, 0]
        self.tricks_played: int = 0
        self.last_trick_winner: int | None = None
        self.outcome: RoundOutcome = RoundOutcome.CONTINUATION

    # ---- Queries ----

    def is_over(self) -> bool:
        return self.outcome.is_terminal()

    def is_draw_phase(self) -> bool:
        return not self.deck.is_empty()

    def deck_size(self) -> int:
        return len(self.deck)

    def team_of(self, seat: int) -> int:
        _check_seat(seat)
        return team_of(seat)

    def hand(self, seat: int) -> tuple[Card, ...]:
        _check_seat(seat)
        return tuple(self.players[seat].hand)

    def current_hand(self) -> tuple[Card, ...]:
        return self.hand(self.current_seat)

    def team_pile(self, team: int) -> tuple[Card, ...]:
        return tuple(self.piles[team])

    def trick_cards(self) -> list[tuple[int, Card]]:
        return self.trick.plays()

    def all_cards(self) -> list[Card]:
        """Every card of the round, wherever it is (deck, marker, hands, trick, piles)."""
        cards = list(self.deck.cards())
        if self.trump_card is not None:
            cards.append(self.trump_card)
        for p in self.players:
            cards.extend(p.hand)
        cards.extend(self.trick.cards())
        cards.extend(self.piles[0])
        cards.extend(self.piles[1])
        return cards

    def legal_cards(self) -> list[Card]:
        if self.is_over():
            return []
        return legal_plays(
            self.players[self.current_seat].hand,
            self.trick.plays(),
            self.current_seat,
            self.trump_suit,
            must_follow=self.deck.is_empty(),
        )

    def check_declaration(self, seat: int, suit: Suit) -> None:
        """Raise IneligibleDeclaration (or InvalidSeat / RoundOver) unless ``seat`` may declare ``suit`` now."""
        _check_seat(seat)
        if self.is_over():
            raise RoundOver("Round is over")
        if not self.trick.is_empty():
            raise IneligibleDeclaration("Declarations are only allowed before the first card of a trick")
        suit = _as_suit(suit)
        if team_of(seat) != team_of(self.current_seat):
            raise IneligibleDeclaration(f"Seat {seat} is not on the team that won the last trick")
        if suit in self.declared:
            raise IneligibleDeclaration(f"{suit.name} has already been declared this round")
        player = self.players[seat]
        if not (player.holds(Card(suit, RANK_SOTA)) and player.holds(Card(suit, RANK_REI))):
            raise IneligibleDeclaration(f"Seat {seat} does not hold the 10 and 12 of {suit.name}")

    def available_declarations(self, seat: int) -> list[Suit]:
        out: list[Suit] = []
        for suit in Suit:
            try:
                self.check_declaration(seat, suit)
            except RuleViolation:
                continue
            out.append(suit)
        return out

    def check_trump_exchange(self, seat: int) -> None:
        """Raise IneligibleTrumpExchange (or InvalidSeat / RoundOver) unless ``seat`` may swap the trump 7 now."""
        _check_seat(seat)
        if self.is_over():
            raise RoundOver("Round is over")
        if not self.trick.is_empty():
            raise IneligibleTrumpExchange("Trump exchange is only allowed before the first card of a trick")
        if team_of(seat) != team_of(self.current_seat):
            raise IneligibleTrumpExchange(f"Seat {seat} is not on the team that won the last trick")
        player = self.players[seat]
        if self.trump_card is None or self.deck.is_empty() or len(player.hand) <= HAND_SIZE - 1:
            raise IneligibleTrumpExchange("Trump exchange is only allowed during the draw phase")
        if not player.holds(Card(self.trump_suit, RANK_SET)):
            raise IneligibleTrumpExchange(f"Seat {seat} does not hold the 7 of {self.trump_suit.name}")

    def can_exchange_trump(self, seat: int) -> bool:
        try:
            self.check_trump_exchange(seat)
        except RuleViolation:
            return False
        return True

    # ---- Commands ----

    def play_card(self, index: int) -> RoundOutcome:
        """Play the card at ``index`` of the current seat's hand."""
        if self.is_over():
            raise RoundOver("Round is over")
        seat = self.current_seat
        player = self.players[seat]
        if not 0 <= index < len(player.hand):
            raise InvalidHandIndex(f"Hand index {index} out of range for {len(player.hand)} cards")
        card = player.hand[index]
        legal = self.legal_cards()
        if card not in legal:
            raise IllegalCard(f"Illegal play {card}; legal {legal}")

        player.remove(index)
        self.trick.place(seat, card)
        self.current_seat = (seat + 1) % NUM_PLAYERS
        if not self.trick.is_full():
            return RoundOutcome.CONTINUATION
        return self._resolve_trick()

    def declare(self, seat: int, suit: Suit) -> RoundOutcome:
        """Cantar: 40 in the trump suit, 20 otherwise, added at once to the seat's team."""
        self.check_declaration(seat, suit)
        suit = Suit(suit)
        points = TRUMP_DECLARATION_POINTS if suit == self.trump_suit else DECLARATION_POINTS
        self.declared.add(suit)
        self.declarations.append((seat, suit, points))
        self.score[team_of(seat)] += points
        logger.info("Seat %d declares %s for %d points", seat, suit.name, points)
        return self.outcome

    def exchange_trump(self, seat: int) -> RoundOutcome:
        """Swap the trump 7 from ``seat``'s hand with the marker card."""
        self.check_trump_exchange(seat)
        assert self.trump_card is not None
        player = self.players[seat]
        seven = Card(self.trump_suit, RANK_SET)
        old_marker = self.trump_card
        player.remove(player.index_of(seven))
        player.add(old_marker)
        self.trump_card = seven
        logger.info("Seat %d exchanges %s for trump marker %s", seat, seven, old_marker)
        return self.outcome

    def abort(self) -> RoundOutcome:
        """Mark the round as invalid; no further moves are accepted."""
        self.outcome = RoundOutcome.INVALID
        return self.outcome

    # ---- Internal helpers ----

    def _resolve_trick(self) -> RoundOutcome:
        plays = self.trick.plays()
        winner = trick_winner(plays, self.trump_suit)
        self.piles[team_of(winner)].extend(c for _, c in plays)
        self.tricks_played += 1
        self.last_trick_winner = winner
        self.trick.reset(winner)
        self.current_seat = winner
        logger.debug("Trick %d %s won by seat %d", self.tricks_played, plays, winner)

        if not self.deck.is_empty():
            self._draw_after_trick(winner)

        # All hands empty together; seat 0 stands for the rest.
        if not self.players[0].hand:
            return self._finish_round()
        return RoundOutcome.TRICK_COMPLETED

    def _draw_after_trick(self, first: int) -> None:
        for k in range(NUM_PLAYERS):
            seat = (first + k) % NUM_PLAYERS
            card = self.deck.draw()
            if card is None:
                card = self.trump_card
                self.trump_card = None
            if card is None:
                break
            self.players[seat].add(card)
        if self.deck.is_empty():
            logger.debug("Deck exhausted after trick %d; arrastre begins", self.tricks_played)

    def _finish_round(self) -> RoundOutcome:
        for team in (0, 1):
            self.score[team] += cards_point_total(self.piles[team])
        assert self.last_trick_winner is not None
        last_team = team_of(self.last_trick_winner)
        self.score[last_team] += LAST_TRICK_BONUS

        if self.score[0] > self.score[1]:
            winner_team = 0
        elif self.score[1] > self.score[0]:
            winner_team = 1
        else:
            winner_team = last_team
        self.outcome = RoundOutcome.TEAM_0_WON if winner_team == 0 else RoundOutcome.TEAM_1_WON
        logger.debug("Round over: score %s, %s", self.score, self.outcome.value)
        return self.outcome

    def __str__(self) -> str:
        return (
            f"Board(seat={self.current_seat}, trump={self.trump_suit.name}, marker={self.trump_card}, "
            f"deck={len(self.deck)}, trick={self.trick.plays()}, score={self.score})"
        )


def offer_post_trick_actions(board: Board, agents: Sequence[Policy]) -> None:
    """Give every seat, in seat order, the chance to declare and then to exchange the trump 7."""
    for seat, agent in enumerate(agents):
        for suit in agent.choose_declarations(board, seat):
            try:
                board.declare(seat, suit)
            except RuleViolation as exc:
                logger.warning("Seat %d declaration rejected: %s", seat, exc)
        if agent.wants_trump_exchange(board, seat):
            try:
                board.exchange_trump(seat)
            except RuleViolation as exc:
                logger.warning("Seat %d trump exchange rejected: %s", seat, exc)


def play_round(
    board: Board,
    agents: Sequence[Policy],
    max_illegal_attempts: int = 3,
) -> RoundOutcome:
    """
    Drive ``board`` to the end with one policy per seat.
    After each completed trick every seat is offered declarations and the exchange.
    A policy that submits ``max_illegal_attempts`` rejected plays in a row aborts the round (INVALID).
    """
    if len(agents) != NUM_PLAYERS:
        raise ValueError(f"Expected {NUM_PLAYERS} agents, got {len(agents)}")
    illegal = 0
    while not board.is_over():
        seat = board.current_seat
        try:
            index = agents[seat].choose_card(board)
            outcome = board.play_card(index)
        except RuleViolation as exc:
            illegal += 1
            logger.warning("Seat %d move rejected (%d/%d): %s", seat, illegal, max_illegal_attempts, exc)
            if illegal >= max_illegal_attempts:
                return board.abort()
            continue
        illegal = 0
        if outcome is RoundOutcome.TRICK_COMPLETED:
            offer_post_trick_actions(board, agents)
    return board.outcome


__all__ = [
    "HAND_SIZE",
    "LAST_TRICK_BONUS",
    "DECLARATION_POINTS",
    "TRUMP_DECLARATION_POINTS",
    "RoundOutcome",
    "Player",
    "Trick",
    "Board",
    "offer_post_trick_actions",
    "play_round",
]
