"""
Environment wrapper around the round engine for RL.

Design:
- Single-agent view: one learning seat per env instance.
- Episode = one round. Reward is given only at the end of the round and equals
  the learning team's score minus the other team's score.
- Other seats are driven by policies (RandomAgent by default). Post-trick
  actions are taken automatically for the learning seat: every available
  declaration, then the trump exchange when allowed.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .agents import Policy, RandomAgent, _TakeEverythingMixin
from .env import NUM_CARD_ACTIONS, encode_observation, hand_index_for_action, legal_action_mask
from .game import Board, RoundOutcome, offer_post_trick_actions
from .play import NUM_PLAYERS, team_of


@dataclass
class StepResult:
    """Container returned by GuinyotEnv.step/reset."""

    obs: np.ndarray
    reward: float
    done: bool
    info: dict
    legal_actions_mask: np.ndarray


class _LearnerSeat(_TakeEverythingMixin):
    """Post-trick stand-in for the learning seat; card choice comes from step()."""

    def choose_card(self, board: Board) -> int:
        raise RuntimeError("The learning seat plays through GuinyotEnv.step")


class GuinyotEnv:
    """
    Single-seat Guinyot environment (one round per episode).

    Public API (Gym-like, without external dependency):
      - reset() -> StepResult
      - step(action: int) -> StepResult   # action = card index 0..39
    """

    def __init__(
        self,
        learning_seat: int = 0,
        opponents: Optional[Sequence[Policy]] = None,
        rng: Optional[random.Random] = None,
        starting_seat: int = 0,
    ) -> None:
        assert 0 <= learning_seat < NUM_PLAYERS
        self.learning_seat = learning_seat
        self.starting_seat = starting_seat
        self.rng = rng or random.Random()
        if opponents is None:
            opponents = [RandomAgent(seed=self.rng.randrange(2**32)) for _ in range(NUM_PLAYERS)]
        if len(opponents) != NUM_PLAYERS:
            raise ValueError(f"Expected {NUM_PLAYERS} seat policies, got {len(opponents)}")
        self._policies: List[Policy] = list(opponents)
        self._policies[learning_seat] = _LearnerSeat()
        self._board: Optional[Board] = None

    @property
    def board(self) -> Board:
        if self._board is None:
            raise RuntimeError("Call reset() before using the environment")
        return self._board

    # ---- Public API ----

    def reset(self) -> StepResult:
        """Deal a new round and return the first decision for the learning seat."""
        self._board = Board(starting_seat=self.starting_seat, rng=self.rng)
        self._advance_other_seats()
        return self._result()

    def step(self, action: int) -> StepResult:
        board = self.board
        if board.is_over():
            return self._result()
        index = hand_index_for_action(board, action)
        outcome = board.play_card(index)
        if outcome is RoundOutcome.TRICK_COMPLETED:
            offer_post_trick_actions(board, self._policies)
        self._advance_other_seats()
        return self._result()

    # ---- Internal helpers ----

    def _advance_other_seats(self) -> None:
        board = self.board
        while not board.is_over() and board.current_seat != self.learning_seat:
            policy = self._policies[board.current_seat]
            outcome = board.play_card(policy.choose_card(board))
            if outcome is RoundOutcome.TRICK_COMPLETED:
                offer_post_trick_actions(board, self._policies)

    def _result(self) -> StepResult:
        board = self.board
        done = board.is_over()
        reward = 0.0
        if done:
            team = team_of(self.learning_seat)
            reward = float(board.score[team] - board.score[1 - team])
            mask = np.zeros(NUM_CARD_ACTIONS, dtype=bool)
        else:
            mask = legal_action_mask(board)
        return StepResult(
            obs=encode_observation(board, self.learning_seat),
            reward=reward,
            done=done,
            info={"outcome": board.outcome, "score": list(board.score), "tricks_played": board.tricks_played},
            legal_actions_mask=mask,
        )


__all__ = ["StepResult", "GuinyotEnv"]
