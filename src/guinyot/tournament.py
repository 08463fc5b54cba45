"""
Population, ELO, and simple tournament orchestration for bot evaluation.

Every round is independent: a new Board (with its own RNG stream) is built
for each table, so rounds can be simulated in any order or split across
workers. Only ratings and per-agent stats carry over; there is no match score.
"""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence, Tuple

from .agents import Policy, make_agent
from .game import Board, RoundOutcome, play_round
from .play import NUM_PLAYERS, team_of

logger = logging.getLogger(__name__)

AgentId = str


@dataclass
class TournamentConfig:
    """Tunables for a tournament run."""

    rounds: int = 10
    k_factor: float = 32.0
    margin_scale: float = 30.0
    max_illegal_attempts: int = 3
    seed: int = 0


@dataclass
class Agent:
    """Metadata and rating for one bot in the population."""

    id: AgentId
    name: str
    kind: str = "random"  # registry name in guinyot.agents.AGENT_KINDS
    elo: float = 1500.0

    rounds_played: int = 0
    rounds_won: int = 0
    total_score_diff: float = 0.0

    def record_round(self, won: bool, score_diff: float) -> None:
        self.rounds_played += 1
        if won:
            self.rounds_won += 1
        self.total_score_diff += score_diff


@dataclass
class Population:
    """Collection of agents taking part in tournaments."""

    agents: Dict[AgentId, Agent] = field(default_factory=dict)

    def add(self, agent: Agent) -> None:
        self.agents[agent.id] = agent

    def get(self, agent_id: AgentId) -> Agent:
        return self.agents[agent_id]

    def all_ids(self) -> List[AgentId]:
        return list(self.agents.keys())

    def ranking(self) -> List[Agent]:
        return sorted(self.agents.values(), key=lambda a: a.elo, reverse=True)


def _expected_score(rating_a: float, rating_b: float) -> float:
    """Expected score of A vs B under standard Elo."""
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / 400.0))


def update_elo_teams(
    seated: Sequence[Agent],
    team_scores: Sequence[int],
    k_factor: float = 32.0,
    margin_scale: float = 30.0,
) -> None:
    """
    Update ELO ratings from one round, agents given in seat order (0..3).

    Each agent is compared with both opponents: the result in (0, 1) comes from
    the team score margin through a logistic curve, deltas are accumulated and
    applied once per agent.
    """
    assert len(seated) == NUM_PLAYERS
    assert len(team_scores) == 2

    deltas = [0.0 for _ in range(NUM_PLAYERS)]
    for i in range(NUM_PLAYERS):
        for j in range(NUM_PLAYERS):
            if team_of(i) == team_of(j):
                continue
            diff = team_scores[team_of(i)] - team_scores[team_of(j)]
            score_ij = 1.0 / (1.0 + math.exp(-diff / margin_scale))
            exp_ij = _expected_score(seated[i].elo, seated[j].elo)
            deltas[i] += k_factor * (score_ij - exp_ij)

    for agent, delta in zip(seated, deltas):
        agent.elo += delta


def make_random_tables(
    agent_ids: List[AgentId],
    rng: random.Random,
    table_size: int = NUM_PLAYERS,
) -> List[List[AgentId]]:
    """
    Split agents into random tables (dropping leftovers if not divisible).
    Position in a table is the seat; seats 0/2 and 1/3 play together.
    """
    shuffled = list(agent_ids)
    rng.shuffle(shuffled)
    tables: List[List[AgentId]] = []
    for i in range(0, len(shuffled) - len(shuffled) % table_size, table_size):
        tables.append(shuffled[i : i + table_size])
    return tables


def run_round_for_table(
    policies: Sequence[Policy],
    rng: random.Random,
    starting_seat: int = 0,
    max_illegal_attempts: int = 3,
) -> Tuple[RoundOutcome, Tuple[int, int]]:
    """Play one independent round with per-seat policies; returns (outcome, team scores)."""
    board = Board(starting_seat=starting_seat, rng=random.Random(rng.randrange(2**32)))
    outcome = play_round(board, policies, max_illegal_attempts=max_illegal_attempts)
    return outcome, (board.score[0], board.score[1])


def default_make_policy(agent: Agent, rng: random.Random) -> Policy:
    return make_agent(agent.kind, seed=rng.randrange(2**32))


def run_tournament_round(
    pop: Population,
    cfg: TournamentConfig,
    rng: random.Random,
    make_policy: Callable[[Agent, random.Random], Policy] = default_make_policy,
) -> List[Tuple[List[AgentId], RoundOutcome, Tuple[int, int]]]:
    """
    Seat the population at random tables and play one round per table.

    Ratings and stats are updated for every finished round; aborted (INVALID)
    rounds are reported but leave ratings untouched.
    """
    results: List[Tuple[List[AgentId], RoundOutcome, Tuple[int, int]]] = []
    tables = make_random_tables(pop.all_ids(), rng=rng)
    for table_ids in tables:
        seated = [pop.get(aid) for aid in table_ids]
        policies = [make_policy(a, rng) for a in seated]
        starting_seat = rng.randrange(NUM_PLAYERS)
        outcome, scores = run_round_for_table(
            policies, rng, starting_seat=starting_seat, max_illegal_attempts=cfg.max_illegal_attempts
        )
        results.append((table_ids, outcome, scores))
        if outcome is RoundOutcome.INVALID:
            logger.warning("Round aborted at table %s", table_ids)
            continue
        winning_team = 0 if outcome is RoundOutcome.TEAM_0_WON else 1
        for seat, agent in enumerate(seated):
            team = team_of(seat)
            agent.record_round(team == winning_team, scores[team] - scores[1 - team])
        update_elo_teams(seated, scores, k_factor=cfg.k_factor, margin_scale=cfg.margin_scale)
    return results


def run_tournament(
    pop: Population,
    cfg: TournamentConfig,
    make_policy: Callable[[Agent, random.Random], Policy] = default_make_policy,
) -> Population:
    """Run ``cfg.rounds`` tournament rounds with a seeded RNG; returns the updated population."""
    rng = random.Random(cfg.seed)
    for i in range(cfg.rounds):
        run_tournament_round(pop, cfg, rng, make_policy=make_policy)
        logger.debug("Tournament round %d/%d done", i + 1, cfg.rounds)
    return pop


__all__ = [
    "AgentId",
    "Agent",
    "Population",
    "TournamentConfig",
    "update_elo_teams",
    "make_random_tables",
    "run_round_for_table",
    "default_make_policy",
    "run_tournament_round",
    "run_tournament",
]
