"""Card and Deck classes - immutable cards drawn from a shuffled 52-card source."""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from random import Random
from typing import Iterator

logger = logging.getLogger(__name__)


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks, ordered Two to Ace."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def points(self) -> int:
        """Return the hard point value (face cards = 10, Ace = 1)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 1
        return 10

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_face(self) -> bool:
        """Check if this rank is a Jack, Queen or King."""
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable playing card.

    Visibility is carried alongside the card but is not part of its
    identity: a face-down Ace of Spades equals a face-up one.
    """

    rank: Rank
    suit: Suit
    face_up: bool = field(default=True, compare=False)

    def __str__(self) -> str:
        if not self.face_up:
            return "??"
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        facing = "" if self.face_up else ", face down"
        return f"Card({self.rank.name}, {self.suit.name}{facing})"

    @property
    def points(self) -> int:
        """Return the hard point value."""
        return self.rank.points

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    def turned(self, face_up: bool) -> "Card":
        """Return this card with the given visibility."""
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a face-up card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {str(rank): rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


class DeckExhaustedError(IndexError):
    """Raised when a round needs a card and the deck has none left."""


class Deck:
    """
    A standard 52-card deck: the card source for one game session.

    The population is built once; the draw pile is a shuffled permutation
    of it that shrinks as cards are drawn, until the next reset.
    """

    def __init__(self, rng: Random | None = None) -> None:
        """
        Initialize a new deck, shuffled and ready to draw from.

        Args:
            rng: Random number generator for reproducible shuffles
        """
        self._rng = rng or Random()
        self._population: tuple[Card, ...] = tuple(
            Card(rank, suit) for suit in Suit for rank in Rank
        )
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Return all 52 cards to the pile and shuffle them."""
        self._cards = list(self._population)
        # Random.shuffle is an in-place Fisher-Yates pass
        self._rng.shuffle(self._cards)
        logger.debug("Deck reset and shuffled (%d cards)", len(self._cards))

    def draw(self, face_up: bool = True) -> Card | None:
        """
        Draw the top card of the pile.

        Args:
            face_up: Visibility of the returned card

        Returns:
            The drawn card, or None when the pile is empty
        """
        if not self._cards:
            logger.debug("Draw requested from an empty deck")
            return None
        return self._cards.pop().turned(face_up)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def population(self) -> tuple[Card, ...]:
        """Return every card the deck holds when full."""
        return self._population
