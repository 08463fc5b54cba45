"""Tests for baseline agents."""
import random

import pytest

from guinyot.agents import AGENT_KINDS, GreedyAgent, RandomAgent, make_agent
from guinyot.deck import Card, Suit
from guinyot.game import Board

from helpers import stacked_board


def test_random_agent_picks_legal_cards():
    agent = RandomAgent(seed=123)
    for seed in range(20):
        board = Board(rng=random.Random(seed))
        board.play_card(0)
        index = agent.choose_card(board)
        assert board.current_hand()[index] in board.legal_cards()


def test_random_agent_is_seeded():
    board = stacked_board()
    picks_a = [RandomAgent(seed=7).choose_card(board) for _ in range(5)]
    picks_b = [RandomAgent(seed=7).choose_card(board) for _ in range(5)]
    assert picks_a == picks_b


def test_greedy_agent_plays_strongest_card():
    board = stacked_board()
    # O1 O5 O11 C3 C7 E1 with espases as trump: the trump ace wins
    index = GreedyAgent().choose_card(board)
    assert index == 5
    assert board.current_hand()[index] == Card(Suit.ESPASES, 1)


def test_agents_take_every_declaration():
    board = stacked_board({0: [Card(Suit.COPES, 10), Card(Suit.COPES, 12)]})
    assert GreedyAgent().choose_declarations(board, 0) == [Suit.COPES]
    assert RandomAgent(seed=0).choose_declarations(board, 1) == []
    assert not RandomAgent(seed=0).wants_trump_exchange(board, 0)


def test_make_agent_by_kind():
    assert set(AGENT_KINDS) == {"random", "greedy"}
    assert isinstance(make_agent("random", seed=1), RandomAgent)
    assert isinstance(make_agent("greedy"), GreedyAgent)
    with pytest.raises(ValueError):
        make_agent("oracle")
