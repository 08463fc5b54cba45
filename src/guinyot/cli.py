"""
Command-line interface for simulating Guinyot rounds between bots.

Usage examples (after installing in editable mode):

    python -m guinyot.cli simulate --seats random greedy random greedy --seed 7
    python -m guinyot.cli tournament --kinds random greedy --population-size 8 --rounds 50
"""
from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

from .agents import AGENT_KINDS, make_agent
from .game import Board, RoundOutcome, play_round
from .play import NUM_PLAYERS
from .tournament import Agent, Population, TournamentConfig, run_tournament


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play one round between four bots and print the result.",
    )
    parser.add_argument(
        "--seats",
        nargs=NUM_PLAYERS,
        choices=sorted(AGENT_KINDS),
        default=["random", "greedy", "random", "greedy"],
        help="Bot kind for seats 0..3 (seats 0/2 and 1/3 are partners).",
    )
    parser.add_argument(
        "--starting-seat",
        type=int,
        default=0,
        choices=range(NUM_PLAYERS),
        help="Seat that leads the first trick.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for the deal and the bots.",
    )
    parser.add_argument(
        "--max-illegal-attempts",
        type=int,
        default=3,
        help="Rejected plays in a row before the round is aborted.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)
    agents = [make_agent(kind, seed=rng.randrange(2**32)) for kind in args.seats]
    board = Board(starting_seat=args.starting_seat, rng=rng)
    print(f"Trump: {board.trump_suit.name} (marker {board.trump_card})")

    outcome = play_round(board, agents, max_illegal_attempts=args.max_illegal_attempts)

    for seat, suit, points in board.declarations:
        print(f"Seat {seat} declared {suit.name} for {points}")
    if outcome is RoundOutcome.INVALID:
        print("Round aborted after repeated illegal moves.")
        return
    print(f"Tricks played: {board.tricks_played}, last trick won by seat {board.last_trick_winner}")
    print(f"Score: team 0 = {board.score[0]}, team 1 = {board.score[1]} -> {outcome.value}")


def _add_tournament_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "tournament",
        help="Rate a population of bots with ELO over many independent rounds.",
    )
    parser.add_argument(
        "--kinds",
        nargs="+",
        choices=sorted(AGENT_KINDS),
        default=sorted(AGENT_KINDS),
        help="Bot kinds; the population cycles through them.",
    )
    parser.add_argument(
        "--population-size",
        type=int,
        default=8,
        help="Number of agents in the population.",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=20,
        help="Number of tournament rounds (every table plays once per round).",
    )
    parser.add_argument(
        "--k-factor",
        type=float,
        default=32.0,
        help="ELO K-factor.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for seating, deals and bots.",
    )
    parser.set_defaults(func=_cmd_tournament)


def _cmd_tournament(args: argparse.Namespace) -> None:
    pop = Population()
    for i in range(args.population_size):
        kind = args.kinds[i % len(args.kinds)]
        pop.add(Agent(id=f"A{i}", name=f"{kind}-{i}", kind=kind))

    cfg = TournamentConfig(rounds=args.rounds, k_factor=args.k_factor, seed=args.seed)
    run_tournament(pop, cfg)

    for rank, a in enumerate(pop.ranking(), start=1):
        win_rate = a.rounds_won / a.rounds_played if a.rounds_played else 0.0
        print(
            f"{rank:2d}. {a.name:<12} elo={a.elo:7.1f} "
            f"rounds={a.rounds_played} win_rate={win_rate:.2f} "
            f"score_diff={a.total_score_diff:+.0f}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="guinyot", description="Guinyot round simulator and bot tournaments.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for engine and driver messages.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    _add_tournament_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
