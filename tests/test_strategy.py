"""
Tests for move selection: the weight heuristic and the human retry loop.
"""

import random

import pytest

from durak.adapters import DummyAdapter
from durak.common.card import Card, NO_CARD, Suit
from durak.common.deck import Deck
from durak.game.errors import InvalidSelectionError
from durak.game.strategy import (
    AutomatedStrategy,
    HumanStrategy,
    MoveKind,
    MoveRequest,
    card_weight,
    lowest_weight_card,
)


def cards(*texts):
    return tuple(Card.from_string(text) for text in texts)


def make_request(kind, hand, legal, trump=Suit.SPADES, player="Hum", **kwargs):
    hand = tuple(sorted(cards(*hand)))
    return MoveRequest(
        kind=kind,
        player=player,
        hand=hand,
        legal=cards(*legal),
        trump=trump,
        **kwargs,
    )


class TestWeight:
    def test_plain_card_weight_is_its_rank(self):
        assert card_weight(Card.from_string("K♥"), Suit.SPADES) == 13

    def test_trumps_outweigh_every_plain_card(self):
        lowest_trump = card_weight(Card.from_string("6♠"), Suit.SPADES)
        highest_plain = card_weight(Card.from_string("A♥"), Suit.SPADES)
        assert lowest_trump == 20
        assert lowest_trump > highest_plain

    def test_ties_break_on_the_lowest_suit_index(self):
        chosen = lowest_weight_card(cards("7♣", "7♥", "7♦"), Suit.SPADES)
        assert chosen == Card.from_string("7♥")

    def test_no_candidates_means_no_card(self):
        assert lowest_weight_card([], Suit.SPADES) is NO_CARD

    def test_chosen_card_is_never_heavier_than_another_candidate(self):
        rng = random.Random(2024)
        full_deck = Deck.full_deck()
        for _ in range(500):
            candidates = rng.sample(full_deck, rng.randint(1, 12))
            trump = rng.choice(list(Suit))
            chosen = lowest_weight_card(candidates, trump)
            assert chosen in candidates
            for other in candidates:
                assert card_weight(chosen, trump) <= card_weight(other, trump)


class TestAutomatedStrategy:
    @pytest.mark.asyncio
    async def test_attacks_with_the_cheapest_card(self):
        request = make_request(
            MoveKind.ATTACK, ["6♠", "9♥", "K♣"], ["6♠", "9♥", "K♣"]
        )
        chosen = await AutomatedStrategy().select_attack(request)
        assert chosen == Card.from_string("9♥")

    @pytest.mark.asyncio
    async def test_defends_with_the_cheapest_beater(self):
        request = make_request(
            MoveKind.DEFENSE,
            ["10♥", "7♠", "K♥"],
            ["10♥", "7♠", "K♥"],
            attack_card=Card.from_string("9♥"),
        )
        chosen = await AutomatedStrategy().select_defense(request)
        assert chosen == Card.from_string("10♥")

    @pytest.mark.asyncio
    async def test_declines_when_nothing_is_legal(self):
        request = make_request(MoveKind.DEFENSE, ["6♥", "7♦"], [])
        assert await AutomatedStrategy().select_defense(request) is NO_CARD
        request = make_request(MoveKind.THROWIN, ["6♥", "7♦"], [])
        assert await AutomatedStrategy().select_throwin(request) is NO_CARD

    @pytest.mark.asyncio
    async def test_select_dispatches_on_kind(self):
        request = make_request(MoveKind.THROWIN, ["7♦", "8♥"], ["7♦"])
        assert await AutomatedStrategy().select(request) == Card.from_string("7♦")


class TestMoveRequest:
    def test_selectable_positions_are_one_based(self):
        request = make_request(MoveKind.DEFENSE, ["6♥", "10♥", "7♠"], ["10♥", "7♠"])
        # Sorted hand: 6♥ 7♠ 10♥
        assert request.selectable == (2, 3)

    def test_decline_labels(self):
        assert MoveKind.ATTACK.decline_label == "pass"
        assert MoveKind.DEFENSE.decline_label == "take cards"
        assert MoveKind.THROWIN.decline_label == "skip"


class TestHumanStrategy:
    def test_resolve_choice(self):
        request = make_request(MoveKind.DEFENSE, ["6♥", "10♥", "7♠"], ["10♥", "7♠"])
        assert HumanStrategy.resolve_choice(request, 2) == Card.from_string("7♠")
        assert HumanStrategy.resolve_choice(request, "3") == Card.from_string("10♥")
        assert HumanStrategy.resolve_choice(request, "0") is NO_CARD

    @pytest.mark.parametrize("choice", ["x", "", None, 4, -1, "1"])
    def test_resolve_choice_rejects(self, choice):
        request = make_request(MoveKind.DEFENSE, ["6♥", "10♥", "7♠"], ["10♥", "7♠"])
        with pytest.raises(InvalidSelectionError):
            HumanStrategy.resolve_choice(request, choice)

    @pytest.mark.asyncio
    async def test_keeps_asking_until_the_choice_is_legal(self):
        adapter = DummyAdapter(auto_choices={"Hum": ["abc", 9, 1, 2]})
        strategy = HumanStrategy(adapter)
        request = make_request(
            MoveKind.DEFENSE,
            ["6♥", "10♥", "7♠"],
            ["10♥", "7♠"],
            attack_card=Card.from_string("9♥"),
        )

        card = await strategy.select_defense(request)

        assert card == Card.from_string("7♠")
        assert len(adapter.requests) == 4
        assert [name for name, _ in adapter.invalid_selections] == ["Hum"] * 3
        assert "6♥ cannot be played now" in adapter.invalid_selections[2][1]

    @pytest.mark.asyncio
    async def test_zero_declines(self):
        adapter = DummyAdapter(auto_choices={"Hum": [0]})
        request = make_request(MoveKind.DEFENSE, ["6♥"], [])
        assert await HumanStrategy(adapter).select_defense(request) is NO_CARD
        assert adapter.invalid_selections == []

    @pytest.mark.asyncio
    async def test_adapter_sees_the_prompt_details(self):
        adapter = DummyAdapter(auto_choices={"Hum": [1]})
        request = make_request(MoveKind.ATTACK, ["7♦", "8♥"], ["7♦", "8♥"])

        await HumanStrategy(adapter).select_attack(request)

        sent = adapter.requests[0]
        assert sent["player"] == "Hum"
        assert sent["cards"] == list(cards("7♦", "8♥"))
        assert sent["selectable"] == [1, 2]
        assert sent["decline_label"] == "pass"
        assert sent["prompt"] == "Choose a card to attack"
