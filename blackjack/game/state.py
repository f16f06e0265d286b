"""Round phases and round state."""

from dataclasses import dataclass, field
from enum import Enum, auto

from blackjack.hand import Hand, Outcome


class RoundPhase(Enum):
    """
    Round state machine phases.

    Flow: NOT_STARTED → IN_PROGRESS → WON | BUST | LOST | DRAW
    A natural 21 on the deal goes straight to WON.
    """

    # No cards dealt yet
    NOT_STARTED = auto()

    # Player may hit or stand
    IN_PROGRESS = auto()

    # Terminal phases
    WON = auto()
    BUST = auto()
    LOST = auto()
    DRAW = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_terminal(self) -> bool:
        """Check if the round is over."""
        return self in TERMINAL_PHASES

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "RoundPhase":
        """Map a round outcome to its terminal phase."""
        return cls[outcome.name]


TERMINAL_PHASES = frozenset(
    {RoundPhase.WON, RoundPhase.BUST, RoundPhase.LOST, RoundPhase.DRAW}
)

_NEW_ROUND = [RoundPhase.IN_PROGRESS, RoundPhase.WON]

# Valid phase transitions
VALID_TRANSITIONS: dict[RoundPhase, list[RoundPhase]] = {
    RoundPhase.NOT_STARTED: _NEW_ROUND,
    RoundPhase.IN_PROGRESS: [
        RoundPhase.IN_PROGRESS,
        RoundPhase.BUST,
        RoundPhase.WON,
        RoundPhase.LOST,
        RoundPhase.DRAW,
        RoundPhase.NOT_STARTED,  # round abandoned
    ],
    RoundPhase.WON: _NEW_ROUND,
    RoundPhase.BUST: _NEW_ROUND,
    RoundPhase.LOST: _NEW_ROUND,
    RoundPhase.DRAW: _NEW_ROUND,
}


def is_valid_transition(from_phase: RoundPhase, to_phase: RoundPhase) -> bool:
    """
    Check if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Desired phase

    Returns:
        True if the transition is allowed
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])


@dataclass
class RoundState:
    """What a caller needs to draw the table."""

    phase: RoundPhase = RoundPhase.NOT_STARTED
    player_hand: Hand = field(default_factory=Hand)
    dealer_hand: Hand = field(default_factory=Hand)
    player_score: int = 0
    dealer_score: int | None = None

    def reset(self) -> None:
        """Clear hands and scores for a new round."""
        self.player_hand.clear()
        self.dealer_hand.clear()
        self.player_score = 0
        self.dealer_score = None
