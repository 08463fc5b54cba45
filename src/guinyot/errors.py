"""Rule violations raised by the round engine. The board is left untouched when one is raised."""
from __future__ import annotations


class RuleViolation(ValueError):
    """Base class for every rejected move or action."""


class InvalidHandIndex(RuleViolation):
    """Hand index outside the acting player's hand."""


class IllegalCard(RuleViolation):
    """Card is not in the current legal-move set."""


class IneligibleDeclaration(RuleViolation):
    """Wrong timing or team, suit already declared, or missing the 10 and 12."""


class IneligibleTrumpExchange(RuleViolation):
    """Wrong timing or team, draw phase over, or missing the trump 7."""


class InvalidSeat(RuleViolation):
    """Seat outside 0..3."""


class RoundOver(RuleViolation):
    """The round has already ended; no further moves are accepted."""


__all__ = [
    "RuleViolation",
    "InvalidHandIndex",
    "IllegalCard",
    "IneligibleDeclaration",
    "IneligibleTrumpExchange",
    "InvalidSeat",
    "RoundOver",
]
