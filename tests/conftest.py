"""Pytest fixtures for blackjack engine tests."""

from random import Random
from unittest.mock import Mock

import pytest
from hypothesis import strategies as st

from blackjack.cards import Card, Deck, Rank, Suit
from blackjack.hand import Hand
from blackjack.rules import RuleSet
from blackjack.game import BlackjackTable, Game


def make_card(rank: Rank, face_up: bool = True) -> Card:
    """A card of the given rank; the suit does not matter for scoring."""
    return Card(rank, Suit.HEARTS, face_up)


def make_cards(*ranks: Rank) -> list[Card]:
    """Face-up cards of the given ranks, in order."""
    return [make_card(rank) for rank in ranks]


def draw_all(deck: Deck) -> list[Card]:
    """Drain the deck."""
    cards = []
    while (card := deck.draw()) is not None:
        cards.append(card)
    return cards


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def scripted_deck():
    """
    A mock deck whose draws are scripted per test.

    Assign `scripted_deck.draw.side_effect` to a list of cards; the mock
    records the visibility each draw was requested with.
    """
    mock_deck = Mock(spec=Deck)
    mock_deck.draw.side_effect = lambda face_up=True: make_card(Rank.TWO, face_up)
    return mock_deck


def script(mock_deck: Mock, *cards: Card) -> None:
    """Make a mock deck hand out these cards, then run dry."""
    remaining = list(cards)

    def draw(face_up: bool = True) -> Card | None:
        if not remaining:
            return None
        return remaining.pop(0).turned(face_up)

    mock_deck.draw.side_effect = draw


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand(make_cards(Rank.ACE, Rank.KING))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand(make_cards(Rank.ACE, Rank.SIX))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(make_cards(Rank.TEN, Rank.SIX, Rank.KING))


@pytest.fixture
def rules():
    """Default dealer rules."""
    return RuleSet()


@pytest.fixture
def game(rng):
    """An engine with a seeded deck."""
    return Game(deck=Deck(rng=rng))


@pytest.fixture
def scripted_game(scripted_deck):
    """An engine drawing from a scripted deck."""
    return Game(deck=scripted_deck)


@pytest.fixture
def scripted_table(scripted_game):
    """A table whose engine draws from a scripted deck."""
    return BlackjackTable(scripted_game)


@pytest.fixture
def table(game):
    """A table with a seeded deck."""
    return BlackjackTable(game)


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=0, max_cards=8):
    """Generate a random list of cards."""
    return draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
