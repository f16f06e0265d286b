"""Dealer rule settings."""

from dataclasses import dataclass

# Dealer keeps drawing while its score is at or below this
DEALER_STAND_THRESHOLD = 17


@dataclass(frozen=True)
class RuleSet:
    """
    How the dealer plays out a hand.

    The stand threshold, the deal, the scoring and the outcome rules are
    fixed; only the soft-hand extension can be switched on.
    """

    # Let a soft dealer hand keep drawing while it trails the player
    soft_hand_redraw: bool = False

    @classmethod
    def standard(cls) -> "RuleSet":
        """Dealer stands above 17, Aces never re-evaluated."""
        return cls()

    @classmethod
    def soft_redraw(cls) -> "RuleSet":
        """Dealer keeps drawing on soft hands that trail the player."""
        return cls(soft_hand_redraw=True)
