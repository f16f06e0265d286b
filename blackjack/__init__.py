"""Blackjack rules engine - 100% UI-agnostic."""

from blackjack.cards import Card, Deck, DeckExhaustedError, Rank, Suit
from blackjack.hand import Hand, Outcome, determine_outcome
from blackjack.rules import RuleSet
from blackjack.scoring import calculate_score

__all__ = [
    "Card",
    "Deck",
    "DeckExhaustedError",
    "Rank",
    "Suit",
    "Hand",
    "Outcome",
    "determine_outcome",
    "RuleSet",
    "calculate_score",
]
