import pytest

from durak.common.card import Card, Suit, Rank, NO_CARD
from durak.common.hand import Hand


@pytest.fixture
def hand():
    return Hand(
        [
            Card(Suit.SPADES, Rank.ACE),
            Card(Suit.HEARTS, Rank.SIX),
            Card(Suit.CLUBS, Rank.SIX),
        ]
    )


def test_empty_hand():
    hand = Hand()
    assert hand.is_empty()
    assert hand.size == 0
    assert hand.sorted_cards() == []


def test_give_adds_cards(hand):
    hand.give(Card(Suit.DIAMONDS, Rank.KING))
    assert hand.size == 4
    assert Card(Suit.DIAMONDS, Rank.KING) in hand


def test_give_rejects_duplicates(hand):
    with pytest.raises(ValueError):
        hand.give(Card(Suit.SPADES, Rank.ACE))
    assert hand.size == 3


def test_give_ignores_no_card(hand):
    hand.give(NO_CARD)
    assert hand.size == 3


def test_take_removes_the_card(hand):
    card = hand.take(Card(Suit.HEARTS, Rank.SIX))
    assert card == Card(Suit.HEARTS, Rank.SIX)
    assert card not in hand
    assert hand.size == 2


def test_take_missing_card_raises(hand):
    with pytest.raises(ValueError):
        hand.take(Card(Suit.DIAMONDS, Rank.SEVEN))


def test_take_no_card_is_a_no_op(hand):
    assert hand.take(NO_CARD) is NO_CARD
    assert hand.size == 3


def test_sorted_view_is_rank_then_suit(hand):
    assert hand.sorted_cards() == [
        Card(Suit.HEARTS, Rank.SIX),
        Card(Suit.CLUBS, Rank.SIX),
        Card(Suit.SPADES, Rank.ACE),
    ]
    assert list(hand) == hand.sorted_cards()


def test_identity_does_not_depend_on_insertion_order():
    cards = [Card(Suit.CLUBS, Rank.NINE), Card(Suit.HEARTS, Rank.SEVEN)]
    assert Hand(cards).cards == Hand(reversed(cards)).cards
    assert Hand(cards).sorted_cards() == Hand(reversed(cards)).sorted_cards()


def test_card_at_uses_zero_based_positions(hand):
    assert hand.card_at(0) == Card(Suit.HEARTS, Rank.SIX)
    assert hand.card_at(2) == Card(Suit.SPADES, Rank.ACE)
    assert hand.card_at(3) is NO_CARD
    assert hand.card_at(-1) is NO_CARD


def test_take_at(hand):
    assert hand.take_at(1) == Card(Suit.CLUBS, Rank.SIX)
    assert hand.size == 2
    assert hand.take_at(5) is NO_CARD
    assert hand.size == 2


def test_cards_is_a_read_only_copy(hand):
    cards = hand.cards
    assert isinstance(cards, frozenset)
    assert len(cards) == 3


def test_str(hand):
    assert str(hand) == "6♥ 6♣ A♠"
