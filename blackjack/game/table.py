"""Single-player table: drives rounds through the engine with a state machine."""

import logging
from typing import Callable

from transitions import Machine

from blackjack.cards import DeckExhaustedError
from blackjack.hand import Outcome, determine_outcome
from blackjack.scoring import BLACKJACK, is_bust
from blackjack.game.engine import Game
from blackjack.game.events import EventType, GameEvent
from blackjack.game.state import VALID_TRANSITIONS, RoundPhase, RoundState

logger = logging.getLogger(__name__)

_OUTCOME_EVENTS = {
    Outcome.WON: EventType.PLAYER_WINS,
    Outcome.LOST: EventType.PLAYER_LOSES,
    Outcome.DRAW: EventType.PUSH,
}


class BlackjackTable:
    """
    One player against the dealer, one round at a time.

    This is the caller side of the engine: it keeps the hands, reads the
    scores and decides when the round is won, lost, drawn or bust. It is
    UI-agnostic; a front end only renders `state` and listens to events.
    """

    # State machine states
    STATES = [p.name.lower() for p in RoundPhase]

    # One "enter_<phase>" trigger per phase, allowed from every phase that
    # VALID_TRANSITIONS lets reach it
    TRANSITIONS = [
        {
            "trigger": f"enter_{dest.name.lower()}",
            "source": [
                source.name.lower()
                for source, dests in VALID_TRANSITIONS.items()
                if dest in dests
            ],
            "dest": dest.name.lower(),
        }
        for dest in RoundPhase
    ]

    def __init__(self, game: Game | None = None) -> None:
        """
        Initialize a table.

        Args:
            game: Engine to play with (a fresh Game if not provided)
        """
        self.game = game or Game()
        self.events = self.game.events
        self.round = RoundState()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="not_started",
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_sync_phase",
        )

    @property
    def phase(self) -> RoundPhase:
        """Get current round phase as enum."""
        return RoundPhase[self._machine_state.upper()]  # type: ignore

    @property
    def state(self) -> RoundState:
        """Hands, scores and phase of the current round."""
        return self.round

    def _sync_phase(self) -> None:
        self.round.phase = self.phase
        logger.debug("Round phase is now %s", self.phase.name)

    def _enter(self, phase: RoundPhase) -> None:
        """Move the machine to `phase`; MachineError if VALID_TRANSITIONS forbids it."""
        self.trigger(f"enter_{phase.name.lower()}")

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def start(self) -> bool:
        """
        Deal a new round.

        Returns:
            True if a round was dealt
        """
        if self.phase == RoundPhase.IN_PROGRESS:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot start a round while one is in progress",
                phase=self.phase.name,
            )
            return False

        # Events of the previous round are no longer needed
        self.events.clear_history()
        dealt = self.game.start_game()

        self.round.reset()
        for card in dealt.player_cards:
            self.round.player_hand.add_card(card)
        for card in dealt.dealer_cards:
            self.round.dealer_hand.add_card(card)
        self.round.player_score = self.game.calculate_score(self.round.player_hand)

        self.events.emit_new(
            EventType.ROUND_STARTED,
            player_value=self.round.player_score,
            dealer_showing=self.round.dealer_hand.visible_score,
        )

        if self.round.player_score == BLACKJACK:
            # Natural: the round ends on the deal, the dealer does not play
            self.events.emit_new(EventType.PLAYER_BLACKJACK)
            self._reveal_dealer()
            self.events.emit_new(EventType.PLAYER_WINS, player_value=BLACKJACK)
            self._enter(RoundPhase.from_outcome(Outcome.WON))
            self._end_round(Outcome.WON)
            return True

        self._enter(RoundPhase.IN_PROGRESS)
        return True

    def hit(self) -> bool:
        """Player takes another card."""
        if not self._require_in_progress("hit"):
            return False

        try:
            card = self.game.hit()
        except DeckExhaustedError as exc:
            self._report_exhausted(exc)
            return False

        self.round.player_hand.add_card(card)
        self.round.player_score = self.game.calculate_score(self.round.player_hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.round.player_score)

        if is_bust(self.round.player_score):
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.round.player_score)
            self._enter(RoundPhase.from_outcome(Outcome.BUST))
            self._end_round(Outcome.BUST)
            return True

        self._enter(RoundPhase.IN_PROGRESS)
        return True

    def stand(self) -> bool:
        """Player stands; the dealer plays out and the round is settled."""
        if not self._require_in_progress("stand"):
            return False

        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.round.player_score)

        try:
            final_cards = self.game.stand(self.round.dealer_hand.cards, self.round.player_score)
        except DeckExhaustedError as exc:
            self._report_exhausted(exc)
            return False

        self.round.dealer_hand.cards = final_cards
        self._reveal_dealer()

        outcome = determine_outcome(self.round.player_score, self.round.dealer_score)
        self.events.emit_new(
            _OUTCOME_EVENTS[outcome],
            player_value=self.round.player_score,
            dealer_value=self.round.dealer_score,
        )

        self._enter(RoundPhase.from_outcome(outcome))

        self._end_round(outcome)
        return True

    def abandon(self) -> bool:
        """Drop the round in progress, e.g. after the deck ran out."""
        if not self._require_in_progress("abandon"):
            return False
        self.round.reset()
        self._enter(RoundPhase.NOT_STARTED)
        return True

    def _reveal_dealer(self) -> None:
        """Turn the hole card over and record the dealer's score."""
        self.round.dealer_hand.reveal()
        self.round.dealer_score = self.game.calculate_score(self.round.dealer_hand)
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            hand=str(self.round.dealer_hand),
            hand_value=self.round.dealer_score,
        )

    def _end_round(self, outcome: Outcome) -> None:
        self.events.emit_new(
            EventType.ROUND_ENDED,
            outcome=outcome.name,
            message=str(outcome),
            player_value=self.round.player_score,
            dealer_value=self.round.dealer_score,
        )

    def _require_in_progress(self, action: str) -> bool:
        if self.phase == RoundPhase.IN_PROGRESS:
            return True
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=f"Cannot {action} in current phase",
            phase=self.phase.name,
        )
        return False

    def _report_exhausted(self, exc: DeckExhaustedError) -> None:
        logger.warning("Round cannot continue: %s", exc)
        self.events.emit_new(EventType.DECK_EXHAUSTED, message=str(exc))

    @property
    def outcome(self) -> Outcome | None:
        """Result of the finished round, or None while it is not over."""
        if not self.phase.is_terminal:
            return None
        return Outcome[self.phase.name]

    @property
    def can_start(self) -> bool:
        """Check if a new round can be dealt."""
        return self.phase != RoundPhase.IN_PROGRESS

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.phase == RoundPhase.IN_PROGRESS

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.phase == RoundPhase.IN_PROGRESS
