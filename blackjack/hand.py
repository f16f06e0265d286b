"""Hand container and round outcome evaluation."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator

from blackjack.cards import Card
from blackjack.scoring import BLACKJACK, calculate_score, is_bust, is_soft


@dataclass
class Hand:
    """Cards held by the player or the dealer, in draw order."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    def reveal(self) -> None:
        """Turn every card face up."""
        self.cards = [card.turned(True) for card in self.cards]

    @property
    def score(self) -> int:
        """Score of the whole hand, hidden cards included."""
        return calculate_score(self.cards)

    @property
    def visible_score(self) -> int:
        """Score of the face-up cards only (what the table can see)."""
        return calculate_score(card for card in self.cards if card.face_up)

    @property
    def is_soft(self) -> bool:
        """Check if an Ace in the hand is counted as 11."""
        return is_soft(self.cards)

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural (21 with two cards)."""
        return len(self.cards) == 2 and self.score == BLACKJACK

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (score > 21)."""
        return is_bust(self.score)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if all(card.face_up for card in self.cards):
            return f"{cards_str} ({self.score})"
        return f"{cards_str} ({self.visible_score} showing)"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, score={self.score})"


class Outcome(Enum):
    """Result of a finished round, from the player's side."""

    WON = auto()
    LOST = auto()
    DRAW = auto()
    BUST = auto()

    def __str__(self) -> str:
        return {
            Outcome.WON: "You win!",
            Outcome.LOST: "You lose :(",
            Outcome.DRAW: "Draw",
            Outcome.BUST: "You went bust!",
        }[self]


def determine_outcome(player_score: int, dealer_score: int) -> Outcome:
    """
    Compare final scores.

    A busted player loses before the dealer's score matters; a busted dealer
    loses to any standing player.
    """
    if is_bust(player_score):
        return Outcome.BUST
    if is_bust(dealer_score) or player_score > dealer_score:
        return Outcome.WON
    if player_score < dealer_score:
        return Outcome.LOST
    return Outcome.DRAW
