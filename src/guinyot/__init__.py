"""Guinyot round engine (four players, two teams, 40-card Spanish deck)."""

__version__ = "0.1.0"

from .deck import Card, Deck, Suit, RANKS, make_deck_40, cards_point_total
from .errors import (
    RuleViolation,
    InvalidHandIndex,
    IllegalCard,
    IneligibleDeclaration,
    IneligibleTrumpExchange,
    InvalidSeat,
    RoundOver,
)
from .play import legal_plays, trick_winner, team_of
from .game import Board, Player, Trick, RoundOutcome, play_round, offer_post_trick_actions
from .agents import Policy, RandomAgent, GreedyAgent, make_agent
