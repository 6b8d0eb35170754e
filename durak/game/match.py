"""
A full Durak match: dealing, choosing the first attacker, running rounds until
one player (the durak) or nobody is left.
"""

import logging
import random
import uuid
from typing import Awaitable, Callable, Dict, Any, List, Optional, Union
from enum import Enum

from durak.common.card import Card
from durak.common.deck import Deck, HAND_SIZE
from durak.events import EventBus, EventEmitter, EngineEventType
from durak.game.constants import MAX_PLAYERS, MIN_PLAYERS
from durak.game.errors import ConfigurationError
from durak.game.round import RoundEngine
from durak.game.state import (
    GameSnapshot,
    MatchResult,
    Player,
    PlayerRole,
    RoundResult,
    RoundStage,
    snapshot_players,
)
from durak.game.table import Table

logger = logging.getLogger(__name__)

Renderer = Callable[[GameSnapshot], Awaitable[None]]


class Match:
    """
    Owns the roster, deck and table of one game and drives it to the end.

    Args:
        players: Seats in playing order, 2 to 4 of them
        rng: Random source for the shuffle and the fallback first-attacker pick
        seed: Seed for a fresh random source when `rng` is not given
        deck: A prepared deck, used instead of shuffling a new one
        emitter: Event emitter to publish on (defaults to the global bus)
        renderer: Coroutine called with a snapshot after every transition
    """

    def __init__(
        self,
        players: List[Player],
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        deck: Optional[Deck] = None,
        emitter: Optional[EventEmitter] = None,
        renderer: Optional[Renderer] = None,
    ):
        if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
            raise ConfigurationError(
                f"Durak needs {MIN_PLAYERS} to {MAX_PLAYERS} players, "
                f"got {len(players)}"
            )
        names = [player.name for player in players]
        if len(set(names)) != len(names):
            raise ConfigurationError(f"Player names must be unique: {names}")

        self.id = str(uuid.uuid4())
        self.rng = rng or random.Random(seed)
        self.deck = deck if deck is not None else Deck(rng=self.rng)
        self.table = Table()
        self.players: List[Player] = list(players)
        self.attacker_index = 0
        self.round_number = 0
        self.stage = RoundStage.DEALING
        self.eliminated: List[str] = []
        self.result: Optional[MatchResult] = None
        self.dealt = False

        self.event_bus = emitter or EventBus.get_instance()
        self.renderer = renderer

        self.event_bus.emit(
            EngineEventType.GAME_CREATED,
            {
                "game_id": self.id,
                "players": names,
                "trump_card": str(self.deck.trump),
            },
        )

    @property
    def trump(self) -> Card:
        return self.deck.trump

    @property
    def is_over(self) -> bool:
        return len(self.players) <= 1

    async def deal(self) -> None:
        """Deal six cards to every player, one at a time in roster order."""
        for _ in range(HAND_SIZE):
            for player in self.players:
                player.hand.give(self.deck.draw())

        for player in self.players:
            await self.publish(
                EngineEventType.CARD_DEALT,
                {"player": player.name, "hand_size": player.hand.size},
                stage=RoundStage.DEALING,
            )

        self.attacker_index = self.find_first_attacker()
        self.dealt = True
        logger.info(
            "Trump is %s, %s attacks first",
            self.trump,
            self.players[self.attacker_index].name,
        )
        await self.publish(
            EngineEventType.GAME_STARTED,
            {
                "trump_card": str(self.trump),
                "first_attacker": self.players[self.attacker_index].name,
            },
            stage=RoundStage.ATTACK,
        )

    def find_first_attacker(self) -> int:
        """
        Index of the player holding the lowest trump. With no trump in any
        hand, a random player.
        """
        trump_suit = self.deck.trump_suit
        lowest = None
        first_attacker_idx = None
        for i, player in enumerate(self.players):
            for card in player.hand.sorted_cards():
                if card.suit != trump_suit:
                    continue
                if lowest is None or card.rank.rank_value < lowest.rank.rank_value:
                    lowest = card
                    first_attacker_idx = i

        if first_attacker_idx is None:
            first_attacker_idx = self.rng.randrange(len(self.players))
            logger.debug("Nobody holds a trump, picked seat %d", first_attacker_idx)
        return first_attacker_idx

    async def play_round(self) -> RoundResult:
        """Run the next round and update the roster and attacker."""
        if not self.dealt:
            await self.deal()
        self.round_number += 1
        return await RoundEngine(self).play()

    async def run(self) -> MatchResult:
        """Play rounds until at most one player is left."""
        if not self.dealt:
            await self.deal()

        while not self.is_over:
            await self.play_round()

        self.stage = RoundStage.GAME_END
        loser = self.players[0].name if self.players else None
        self.result = MatchResult(
            loser=loser, rounds=self.round_number, eliminated=tuple(self.eliminated)
        )
        logger.info("Game over: %s", self.result)
        await self.publish(
            EngineEventType.GAME_ENDED,
            {"loser": loser, "rounds": self.round_number, "draw": loser is None},
            stage=RoundStage.GAME_END,
        )
        return self.result

    def eliminate(self, player: Player) -> None:
        self.players.remove(player)
        self.eliminated.append(player.name)

    def all_cards(self) -> List[Card]:
        """Every card in the match: stock, hands, table and discard pile."""
        cards = list(self.deck.cards)
        for player in self.players:
            cards.extend(player.hand.sorted_cards())
        cards.extend(self.table.cards())
        cards.extend(self.table.discard_pile)
        return cards

    def snapshot(self, stage: Optional[RoundStage] = None, active=None) -> GameSnapshot:
        """Read-only view of the match for rendering."""
        attacker = next(
            (p.name for p in self.players if p.role is PlayerRole.ATTACKER), None
        )
        defender = next(
            (p.name for p in self.players if p.role is PlayerRole.DEFENDER), None
        )
        if attacker is None and len(self.players) >= 2 and self.dealt:
            # Between rounds: the seats the next round will use
            index = self.attacker_index % len(self.players)
            attacker = self.players[index].name
            defender = self.players[(index + 1) % len(self.players)].name
        return GameSnapshot(
            round_number=self.round_number,
            stage=stage or self.stage,
            trump_card=self.trump,
            deck_size=self.deck.size,
            discard_size=len(self.table.discard_pile),
            players=snapshot_players(self.players),
            table=tuple(self.table.attack_defense_pairs),
            attacker=attacker,
            defender=defender,
            active_player=active.name if active is not None else None,
        )

    async def publish(
        self,
        event_type: Union[str, Enum],
        data: Dict[str, Any],
        stage: Optional[RoundStage] = None,
        active: Optional[Player] = None,
    ) -> None:
        """Emit a transition on the event bus and hand a snapshot to the renderer."""
        if stage is not None:
            self.stage = stage
        payload = {"game_id": self.id, "round_number": self.round_number}
        payload.update(data)
        self.event_bus.emit(event_type, payload)

        if self.renderer is not None:
            await self.renderer(self.snapshot(active=active))
