"""
The round state machine of Durak.

One `RoundEngine.play()` call runs a full exchange between the current
attacker and defender:

    ATTACK -> DEFEND_OR_TAKE -> (THROWIN)* -> RESOLVE -> REFILL -> ROTATE

Every move a strategy returns is validated before any card changes hands, and
every card transfer removes the card from its source in the same step it
lands in its destination. After each transition the match publishes an event
and a snapshot.
"""

import logging
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

from durak.common.card import Card, NO_CARD
from durak.events import EngineEventType
from durak.game.errors import IllegalMoveError
from durak.game.state import (
    Player,
    PlayerRole,
    RoundOutcome,
    RoundResult,
    RoundStage,
)
from durak.game.strategy import MoveKind, MoveRequest
from durak.game.validator import (
    is_legal_attack,
    is_legal_defense,
    is_throwin_allowed,
    legal_attacks,
    legal_defenses,
)

if TYPE_CHECKING:
    from durak.game.match import Match

logger = logging.getLogger(__name__)


def first_survivor(
    seating: Sequence[Player],
    start: Player,
    survivors: Sequence[Player],
    inclusive: bool = False,
) -> Optional[Player]:
    """
    Walk the seating order from `start` and return the first player still in
    `survivors`. `start` itself is considered only when `inclusive` is set.
    """
    alive = set(id(player) for player in survivors)
    origin = seating.index(start)
    first_offset = 0 if inclusive else 1
    for offset in range(first_offset, first_offset + len(seating)):
        candidate = seating[(origin + offset) % len(seating)]
        if id(candidate) in alive:
            return candidate
    return None


def rotate_roles(
    seating: Sequence[Player],
    survivors: Sequence[Player],
    attacker: Player,
    defender: Player,
    outcome: RoundOutcome,
) -> Tuple[Optional[Player], Optional[Player]]:
    """
    Work out the next attacker and defender from seats, not indices.

    `seating` is the roster as it was when the round started and `survivors`
    the roster after elimination. The defender who took cards is skipped; the
    defender who beat every attack attacks next (or the next survivor after
    them, if they went out). A passed attack moves on to the next survivor
    after the attacker. The new defender always sits right after the new
    attacker among the survivors.
    """
    if len(survivors) < 2:
        return None, None

    if outcome is RoundOutcome.TAKEN:
        next_attacker = first_survivor(seating, defender, survivors)
    elif outcome is RoundOutcome.DEFENDED:
        next_attacker = first_survivor(seating, defender, survivors, inclusive=True)
    else:
        next_attacker = first_survivor(seating, attacker, survivors)

    next_defender = first_survivor(seating, next_attacker, survivors)
    return next_attacker, next_defender


class RoundEngine:
    """
    Runs one attacker/defender exchange on a match.

    The engine works directly on the match's roster, deck and table. It never
    keeps a numeric seat index across an elimination: the next attacker is
    found by seat and converted back into an index of the shrunken roster.
    """

    def __init__(self, match: "Match"):
        self.match = match
        self.attacker: Optional[Player] = None
        self.defender: Optional[Player] = None
        self.slots = 0

    @property
    def trump(self):
        return self.match.deck.trump_suit

    async def play(self) -> RoundResult:
        match = self.match
        players = match.players
        if len(players) < 2:
            raise IllegalMoveError("A round needs at least two players")

        self.attacker = players[match.attacker_index]
        self.defender = players[(match.attacker_index + 1) % len(players)]
        for player in players:
            if player is self.attacker:
                player.role = PlayerRole.ATTACKER
            elif player is self.defender:
                player.role = PlayerRole.DEFENDER
            else:
                player.role = PlayerRole.CO_ATTACKER

        logger.info(
            "Round %d: %s attacks %s",
            match.round_number,
            self.attacker.name,
            self.defender.name,
        )
        await match.publish(
            EngineEventType.ROUND_STARTED,
            {"attacker": self.attacker.name, "defender": self.defender.name},
            stage=RoundStage.ATTACK,
            active=self.attacker,
        )

        seating = list(players)

        opened = await self._attack()
        if not opened:
            return await self._rotate(seating, RoundOutcome.PASSED, slots=0)

        took = await self._defend_or_take()
        slots = self.slots

        if not took:
            discarded = match.table.discard()
            logger.debug(
                "%s beat every attack, %d cards discarded",
                self.defender.name,
                len(discarded),
            )
            await match.publish(
                EngineEventType.CARDS_DISCARDED,
                {
                    "defender": self.defender.name,
                    "cards": [str(card) for card in discarded],
                    "discard_pile_size": len(match.table.discard_pile),
                },
                stage=RoundStage.RESOLVE,
            )

        await self._refill()

        outcome = RoundOutcome.TAKEN if took else RoundOutcome.DEFENDED
        return await self._rotate(seating, outcome, slots=slots)

    async def _attack(self) -> bool:
        """ATTACK: the attacker opens the first slot. Returns False on a pass."""
        attacker = self.attacker
        if attacker.hand.is_empty():
            logger.warning("%s has no card to open the round with", attacker.name)
            card = NO_CARD
        else:
            request = self._request(
                MoveKind.ATTACK, attacker, attacker.hand.sorted_cards()
            )
            card = await attacker.strategy.select_attack(request)

        if not card:
            logger.info("%s passes the attack", attacker.name)
            await self.match.publish(
                EngineEventType.ATTACK_PASSED,
                {"player": attacker.name},
                stage=RoundStage.ATTACK,
            )
            return False

        self._check(
            attacker, card, is_legal_attack(self.match.table, card), MoveKind.ATTACK
        )
        self.match.table.place_attack(attacker.hand.take(card))
        self.slots = self.match.table.slot_count
        logger.debug("%s attacks with %s", attacker.name, card)
        await self.match.publish(
            EngineEventType.ATTACK_PLAYED,
            {"player": attacker.name, "card": str(card)},
            stage=RoundStage.DEFEND_OR_TAKE,
            active=self.defender,
        )
        return True

    async def _defend_or_take(self) -> bool:
        """
        DEFEND_OR_TAKE and THROWIN until the exchange ends.

        Returns True when the defender took the table.
        """
        table = self.match.table
        defender = self.defender

        while True:
            attack = table.get_undefended_card()
            request = self._request(
                MoveKind.DEFENSE,
                defender,
                legal_defenses(defender.hand, attack, self.trump),
                attack_card=attack,
            )
            card = await defender.strategy.select_defense(request)

            if not card:
                taken = table.give_to(defender.hand)
                logger.debug("%s takes %d cards", defender.name, len(taken))
                await self.match.publish(
                    EngineEventType.CARDS_TAKEN,
                    {
                        "player": defender.name,
                        "cards": [str(c) for c in taken],
                        "hand_size": defender.hand.size,
                    },
                    stage=RoundStage.RESOLVE,
                )
                return True

            self._check(
                defender,
                card,
                is_legal_defense(attack, card, self.trump),
                MoveKind.DEFENSE,
            )
            table.place_defense(defender.hand.take(card))
            logger.debug("%s beats %s with %s", defender.name, attack, card)
            await self.match.publish(
                EngineEventType.DEFENSE_PLAYED,
                {"player": defender.name, "card": str(card), "against": str(attack)},
                stage=RoundStage.THROWIN,
            )

            if not await self._throwin():
                return False

    async def _throwin(self) -> bool:
        """
        THROWIN: one pass over every non-defender, attacker first.

        Returns True if someone threw a card in.
        """
        table = self.match.table
        defender = self.defender
        players = self.match.players
        origin = players.index(self.attacker)

        for offset in range(len(players)):
            player = players[(origin + offset) % len(players)]
            if player is defender:
                continue
            if not is_throwin_allowed(table, defender.hand):
                return False

            legal = legal_attacks(player.hand, table)
            if not legal:
                continue

            request = self._request(MoveKind.THROWIN, player, legal)
            card = await player.strategy.select_throwin(request)
            if not card:
                continue

            self._check(player, card, is_legal_attack(table, card), MoveKind.THROWIN)
            table.place_attack(player.hand.take(card))
            self.slots = table.slot_count
            logger.debug("%s throws in %s", player.name, card)
            await self.match.publish(
                EngineEventType.CARD_THROWN_IN,
                {
                    "player": player.name,
                    "card": str(card),
                    "slots": table.slot_count,
                },
                stage=RoundStage.DEFEND_OR_TAKE,
                active=defender,
            )
            return True

        return False

    async def _refill(self) -> None:
        """REFILL: attacker first, then seating order, defender last."""
        deck = self.match.deck
        drawn = {}
        for player in self.refill_order():
            drawn[player.name] = deck.refill(player.hand)

        await self.match.publish(
            EngineEventType.HANDS_REFILLED,
            {"drawn": drawn, "deck_remaining": deck.size},
            stage=RoundStage.REFILL,
        )

    def refill_order(self) -> List[Player]:
        players = self.match.players
        origin = players.index(self.attacker)
        order = [
            players[(origin + offset) % len(players)]
            for offset in range(len(players))
        ]
        order.remove(self.defender)
        order.append(self.defender)
        return order

    async def _rotate(
        self, seating: List[Player], outcome: RoundOutcome, slots: int
    ) -> RoundResult:
        """ROTATE: drop empty hands and pick the next attacker by seat."""
        match = self.match

        eliminated = [player for player in seating if player.hand.is_empty()]
        for player in eliminated:
            match.eliminate(player)
            logger.info("%s is out of the game", player.name)
            await match.publish(
                EngineEventType.PLAYER_ELIMINATED,
                {"player": player.name, "players_left": len(match.players)},
                stage=RoundStage.ROTATE,
            )

        for player in seating:
            player.role = None

        next_attacker, next_defender = rotate_roles(
            seating, match.players, self.attacker, self.defender, outcome
        )
        if next_attacker is not None:
            match.attacker_index = match.players.index(next_attacker)

        result = RoundResult(
            outcome=outcome,
            attacker=self.attacker.name,
            defender=self.defender.name,
            slots=slots,
            eliminated=tuple(player.name for player in eliminated),
            next_attacker=next_attacker.name if next_attacker else None,
            next_defender=next_defender.name if next_defender else None,
        )
        await match.publish(
            EngineEventType.ROUND_ENDED,
            {
                "outcome": outcome.name,
                "slots": slots,
                "eliminated": list(result.eliminated),
                "next_attacker": result.next_attacker,
                "next_defender": result.next_defender,
            },
            stage=RoundStage.ROTATE,
        )
        return result

    def _request(
        self,
        kind: MoveKind,
        player: Player,
        legal: List[Card],
        attack_card: Card = NO_CARD,
    ) -> MoveRequest:
        return MoveRequest(
            kind=kind,
            player=player.name,
            hand=tuple(player.hand.sorted_cards()),
            legal=tuple(legal),
            trump=self.trump,
            table=tuple(self.match.table.attack_defense_pairs),
            attack_card=attack_card,
            defender_cards=self.defender.hand.size,
        )

    @staticmethod
    def _check(player: Player, card: Card, legal: bool, kind: MoveKind) -> None:
        if card not in player.hand:
            raise IllegalMoveError(f"{player.name} does not hold {card}")
        if not legal:
            raise IllegalMoveError(
                f"{card} is not a legal {kind.value} for {player.name}"
            )
