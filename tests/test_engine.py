"""
Tests for the Durak engine: configuration, seating and a full run through a
dummy adapter.
"""

import pytest

from durak.adapters import DummyAdapter
from durak.engine import DurakEngine
from durak.game.errors import ConfigurationError, IllegalMoveError
from durak.game.state import MatchResult
from durak.game.strategy import AutomatedStrategy, HumanStrategy


class TestDurakEngineConfig:
    def test_defaults(self):
        engine = DurakEngine(DummyAdapter())
        assert engine.config == {
            "num_players": 2,
            "ai_as_human": False,
            "seed": None,
            "human_name": "Hum",
        }

    @pytest.mark.parametrize("num_players", [0, 1, 5, "3", 2.0, True, None])
    def test_player_count_outside_two_to_four_is_rejected(self, num_players):
        with pytest.raises(ConfigurationError):
            DurakEngine(DummyAdapter(), {"num_players": num_players})

    def test_configuration_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            DurakEngine(DummyAdapter(), {"num_players": 7})

    def test_empty_human_name_is_rejected(self):
        with pytest.raises(ConfigurationError):
            DurakEngine(DummyAdapter(), {"human_name": ""})


class TestSeating:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("num_players", [2, 3, 4])
    async def test_default_roster(self, num_players):
        engine = DurakEngine(DummyAdapter(), {"num_players": num_players, "seed": 1})

        await engine.start_game()

        expected = ["Hum", "Ai1", "Ai2", "Ai3"][:num_players]
        assert [player.name for player in engine.players] == expected
        assert isinstance(engine.players[0].strategy, HumanStrategy)
        assert all(
            isinstance(player.strategy, AutomatedStrategy)
            for player in engine.players[1:]
        )

    @pytest.mark.asyncio
    async def test_spectator_mode_automates_the_human_seat(self):
        engine = DurakEngine(
            DummyAdapter(), {"ai_as_human": True, "human_name": "Watcher", "seed": 1}
        )

        await engine.start_game()

        assert engine.players[0].name == "Watcher"
        assert isinstance(engine.players[0].strategy, AutomatedStrategy)

    @pytest.mark.asyncio
    async def test_add_player(self):
        adapter = DummyAdapter()
        engine = DurakEngine(adapter, {"seed": 3})
        await engine.initialize()

        player_id = await engine.add_player("Alice", human=True)
        await engine.add_player("Bob")
        await engine.start_game()

        assert engine.players[0].id == player_id
        assert [p.name for p in engine.match.players] == ["Alice", "Bob"]
        joined = adapter.get_events_by_type("PLAYER_JOINED")
        assert [event["player"] for event in joined] == ["Alice", "Bob"]

    @pytest.mark.asyncio
    async def test_no_players_join_a_running_game(self):
        engine = DurakEngine(DummyAdapter(), {"seed": 3})
        await engine.start_game()

        with pytest.raises(ConfigurationError):
            await engine.add_player("Late")


class TestDurakEngineRun:
    @pytest.mark.asyncio
    async def test_spectator_game_runs_to_a_result(self):
        adapter = DummyAdapter()
        engine = DurakEngine(
            adapter, {"num_players": 3, "ai_as_human": True, "seed": 5}
        )

        await engine.initialize()
        result = await engine.run()
        await engine.shutdown()

        assert isinstance(result, MatchResult)
        assert engine.result is result
        event_types = [event_type for event_type, _ in adapter.events]
        assert event_types[0] == "ENGINE_INIT"
        assert "GAME_CREATED" in event_types
        assert "GAME_STARTED" in event_types
        assert event_types[-2] == "GAME_ENDED"
        assert event_types[-1] == "ENGINE_SHUTDOWN"
        assert adapter.requests == []

    @pytest.mark.asyncio
    async def test_states_are_rendered_after_transitions(self):
        adapter = DummyAdapter()
        engine = DurakEngine(adapter, {"ai_as_human": True, "seed": 8})

        await engine.initialize()
        await engine.run()
        await engine.shutdown()

        assert len(adapter.rendered_states) > 10
        state = adapter.rendered_states[-1]
        assert state["stage"] == "GAME_END"
        assert set(state) >= {
            "round_number",
            "trump_card",
            "deck_remaining",
            "players",
            "table",
            "attacker",
            "defender",
        }

    @pytest.mark.asyncio
    async def test_events_reach_the_adapter_before_the_next_render(self):
        adapter = DummyAdapter()
        engine = DurakEngine(adapter, {"ai_as_human": True, "seed": 2})
        order = []

        async def render(state):
            order.append("render")

        async def notify(event_type, data):
            order.append(event_type)

        adapter.render_game_state = render
        adapter.notify_game_event = notify

        await engine.initialize()
        await engine.start_game()
        await engine.match.deal()

        assert order[-2:] == ["GAME_STARTED", "render"]

    @pytest.mark.asyncio
    async def test_human_seat_is_asked_through_the_adapter(self):
        adapter = DummyAdapter()
        engine = DurakEngine(adapter, {"seed": 6})

        await engine.initialize()
        await engine.start_game()
        await engine.match.play_round()

        # With two players the human either attacks or defends every round
        assert adapter.requests
        assert {request["player"] for request in adapter.requests} == {"Hum"}

    @pytest.mark.asyncio
    async def test_illegal_move_is_reported_and_raised(self):
        adapter = DummyAdapter()
        engine = DurakEngine(adapter, {"ai_as_human": True, "seed": 1})
        await engine.initialize()
        await engine.start_game()

        async def broken(request):
            raise IllegalMoveError("bad move")

        for player in engine.players:
            player.strategy.select_attack = broken

        with pytest.raises(IllegalMoveError):
            await engine.run()

        errors = adapter.get_events_by_type("ERROR")
        assert errors[0]["message"] == "bad move"
