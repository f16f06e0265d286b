"""Tests for round phases, round state and events."""

import pytest
from transitions import MachineError

from blackjack.cards import Rank
from blackjack.hand import Outcome
from blackjack.game import EventEmitter, EventType, RoundPhase, RoundState
from blackjack.game.state import VALID_TRANSITIONS, is_valid_transition

from conftest import make_card


class TestRoundPhase:
    """Tests for the phase enum and its transition table."""

    def test_terminal_phases(self):
        """Test which phases end a round."""
        assert not RoundPhase.NOT_STARTED.is_terminal
        assert not RoundPhase.IN_PROGRESS.is_terminal
        for phase in (RoundPhase.WON, RoundPhase.BUST, RoundPhase.LOST, RoundPhase.DRAW):
            assert phase.is_terminal

    def test_str(self):
        """Test readable names."""
        assert str(RoundPhase.IN_PROGRESS) == "In Progress"

    def test_from_outcome(self):
        """Test every outcome has a matching terminal phase."""
        for outcome in Outcome:
            assert RoundPhase.from_outcome(outcome).is_terminal

    def test_every_phase_has_transitions(self):
        """Test the table covers all phases."""
        assert set(VALID_TRANSITIONS) == set(RoundPhase)

    def test_valid_transitions(self):
        """Test the allowed moves."""
        assert is_valid_transition(RoundPhase.NOT_STARTED, RoundPhase.IN_PROGRESS)
        assert is_valid_transition(RoundPhase.NOT_STARTED, RoundPhase.WON)
        assert is_valid_transition(RoundPhase.IN_PROGRESS, RoundPhase.IN_PROGRESS)
        assert is_valid_transition(RoundPhase.IN_PROGRESS, RoundPhase.BUST)
        assert is_valid_transition(RoundPhase.LOST, RoundPhase.IN_PROGRESS)

    def test_invalid_transitions(self):
        """Test moves that skip play or leave a finished round sideways."""
        assert not is_valid_transition(RoundPhase.NOT_STARTED, RoundPhase.BUST)
        assert not is_valid_transition(RoundPhase.NOT_STARTED, RoundPhase.LOST)
        assert not is_valid_transition(RoundPhase.WON, RoundPhase.LOST)
        assert not is_valid_transition(RoundPhase.BUST, RoundPhase.BUST)

    def test_table_machine_matches_transitions(self):
        """Test the table's state machine only allows listed transitions."""
        from blackjack.game.table import BlackjackTable

        for transition in BlackjackTable.TRANSITIONS:
            dest = RoundPhase[transition["dest"].upper()]
            for source in transition["source"]:
                assert is_valid_transition(RoundPhase[source.upper()], dest)

    def test_table_machine_covers_transitions(self):
        """Test every listed transition can be triggered on the table."""
        from blackjack.game.table import BlackjackTable

        allowed = {
            (source, transition["dest"])
            for transition in BlackjackTable.TRANSITIONS
            for source in transition["source"]
        }
        for source, dests in VALID_TRANSITIONS.items():
            for dest in dests:
                assert (source.name.lower(), dest.name.lower()) in allowed

    def test_table_rejects_unlisted_transition(self):
        """Test the machine refuses a move the transition table forbids."""
        from blackjack.game.table import BlackjackTable

        table = BlackjackTable()

        with pytest.raises(MachineError):
            table.trigger("enter_lost")
        assert table.phase == RoundPhase.NOT_STARTED


class TestRoundState:
    """Tests for the round state container."""

    def test_defaults(self):
        """Test a fresh state before any deal."""
        state = RoundState()
        assert state.phase == RoundPhase.NOT_STARTED
        assert len(state.player_hand) == 0
        assert len(state.dealer_hand) == 0
        assert state.player_score == 0
        assert state.dealer_score is None

    def test_reset(self):
        """Test reset clears hands and scores."""
        state = RoundState(player_score=18, dealer_score=20)
        state.player_hand.add_card(make_card(Rank.NINE))
        state.dealer_hand.add_card(make_card(Rank.KING))

        state.reset()

        assert len(state.player_hand) == 0
        assert len(state.dealer_hand) == 0
        assert state.player_score == 0
        assert state.dealer_score is None


class TestEventEmitter:
    """Tests for the event emitter."""

    def test_typed_and_catch_all_handlers(self):
        """Test typed handlers run before catch-all ones."""
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(lambda e: seen.append(("all", e.event_type)))
        emitter.subscribe(lambda e: seen.append(("hit", e.event_type)), EventType.PLAYER_HIT)

        emitter.emit_new(EventType.PLAYER_HIT, hand_value=15)
        emitter.emit_new(EventType.PLAYER_STAND)

        assert seen == [
            ("hit", EventType.PLAYER_HIT),
            ("all", EventType.PLAYER_HIT),
            ("all", EventType.PLAYER_STAND),
        ]

    def test_unsubscribe(self):
        """Test a removed handler is no longer called."""
        emitter = EventEmitter()
        seen = []
        handler = seen.append
        emitter.subscribe(handler, EventType.PUSH)
        emitter.unsubscribe(handler, EventType.PUSH)
        emitter.unsubscribe(handler, EventType.PUSH)

        emitter.emit_new(EventType.PUSH)

        assert seen == []

    def test_history(self):
        """Test events are recorded and can be cleared."""
        emitter = EventEmitter()
        event = emitter.emit_new(EventType.CARD_DEALT, card="A♠", hand="player")

        assert emitter.history == [event]
        assert emitter.types() == [EventType.CARD_DEALT]
        assert str(event) == "CARD_DEALT: {'card': 'A♠', 'hand': 'player'}"

        emitter.clear_history()
        assert emitter.history == []
