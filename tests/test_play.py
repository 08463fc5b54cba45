"""Tests for legal moves and trick resolution."""
from guinyot.deck import Card, Suit
from guinyot.play import legal_plays, team_of, trick_winner

O, C, E, B = Suit.ORUS, Suit.COPES, Suit.ESPASES, Suit.BASTOS
TRUMP = E


def test_team_by_seat_parity():
    assert [team_of(s) for s in range(4)] == [0, 1, 0, 1]


def test_draw_phase_everything_legal():
    hand = [Card(O, 2), Card(C, 1), Card(E, 7)]
    trick = [(0, Card(O, 1))]
    assert legal_plays(hand, trick, 1, TRUMP, must_follow=False) == hand


def test_arrastre_leading_everything_legal():
    hand = [Card(O, 2), Card(C, 1), Card(E, 7)]
    assert legal_plays(hand, [], 0, TRUMP, must_follow=True) == hand


def test_partner_winning_must_follow_suit():
    hand = [Card(O, 2), Card(O, 1), Card(E, 7), Card(C, 3)]
    trick = [(0, Card(O, 3)), (1, Card(O, 4))]
    # seat 2's partner (seat 0) is winning with the 3
    legal = legal_plays(hand, trick, 2, TRUMP, must_follow=True)
    assert set(legal) == {Card(O, 2), Card(O, 1)}


def test_partner_winning_without_led_suit_plays_anything():
    hand = [Card(E, 7), Card(C, 3)]
    trick = [(0, Card(O, 3)), (1, Card(O, 4))]
    assert legal_plays(hand, trick, 2, TRUMP, must_follow=True) == hand


def test_opponent_winning_must_beat_in_suit():
    hand = [Card(O, 2), Card(O, 1), Card(E, 7)]
    trick = [(0, Card(O, 3))]
    assert legal_plays(hand, trick, 1, TRUMP, must_follow=True) == [Card(O, 1)]


def test_opponent_winning_follow_when_cannot_beat():
    hand = [Card(O, 2), Card(O, 12), Card(E, 7)]
    trick = [(0, Card(O, 3))]
    assert set(legal_plays(hand, trick, 1, TRUMP, must_follow=True)) == {Card(O, 2), Card(O, 12)}


def test_opponent_winning_must_trump_without_led_suit():
    hand = [Card(C, 1), Card(E, 2), Card(E, 11)]
    trick = [(0, Card(O, 3))]
    assert set(legal_plays(hand, trick, 1, TRUMP, must_follow=True)) == {Card(E, 2), Card(E, 11)}


def test_opponent_winning_with_trump_must_overtrump():
    hand = [Card(C, 1), Card(E, 2), Card(E, 1)]
    trick = [(0, Card(O, 3)), (1, Card(E, 7))]
    # seat 2 faces seat 1's trump 7: only the trump ace beats it
    assert legal_plays(hand, trick, 2, TRUMP, must_follow=True) == [Card(E, 1)]


def test_opponent_winning_with_higher_trump_frees_the_hand():
    hand = [Card(C, 1), Card(E, 2)]
    trick = [(0, Card(O, 3)), (1, Card(E, 7))]
    assert legal_plays(hand, trick, 2, TRUMP, must_follow=True) == hand


def test_opponent_trumped_led_suit_must_still_be_followed():
    hand = [Card(O, 1), Card(O, 2), Card(E, 1)]
    trick = [(0, Card(O, 3)), (1, Card(E, 7))]
    assert set(legal_plays(hand, trick, 2, TRUMP, must_follow=True)) == {Card(O, 1), Card(O, 2)}


def test_forced_follow_legal_set_never_empty_and_subset():
    hands = [
        [Card(C, 4)],
        [Card(B, 1), Card(C, 2)],
        [Card(O, 12), Card(E, 3), Card(B, 5)],
    ]
    tricks = [
        [(0, Card(O, 3))],
        [(0, Card(O, 3)), (1, Card(E, 7))],
        [(3, Card(B, 10)), (0, Card(B, 3)), (1, Card(O, 1))],
    ]
    for hand in hands:
        for trick in tricks:
            seat = (trick[0][0] + len(trick)) % 4
            legal = legal_plays(hand, trick, seat, TRUMP, must_follow=True)
            assert legal
            assert set(legal) <= set(hand)


def test_trick_winner_highest_of_led_suit():
    trick = [(1, Card(O, 12)), (2, Card(O, 3)), (3, Card(C, 1)), (0, Card(O, 1))]
    assert trick_winner(trick, TRUMP) == 0


def test_trick_winner_trump_beats_led_suit():
    trick = [(0, Card(O, 1)), (1, Card(E, 2)), (2, Card(O, 3)), (3, Card(C, 1))]
    assert trick_winner(trick, TRUMP) == 1


def test_trick_winner_highest_trump():
    trick = [(2, Card(B, 1)), (3, Card(E, 4)), (0, Card(E, 12)), (1, Card(E, 5))]
    assert trick_winner(trick, TRUMP) == 0


def test_trick_winner_off_suit_never_wins():
    trick = [(3, Card(C, 2)), (0, Card(O, 1)), (1, Card(B, 1)), (2, Card(C, 4))]
    assert trick_winner(trick, TRUMP) == 2
