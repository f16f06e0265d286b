"""Hand scoring with Ace dual valuation."""

from typing import Iterable

from blackjack.cards import Card

BLACKJACK = 21

# An Ace is worth 11 while the running total is at most this
ACE_HIGH_LIMIT = 10


def calculate_score(cards: Iterable[Card]) -> int:
    """
    Calculate the blackjack score of a hand.

    Non-Ace cards are summed first. Every Ace but the last then counts 1,
    and the last Ace counts 11 if the running total at that point is 10 or
    less, otherwise 1. At most one Ace is ever worth 11.

    Visibility is ignored and the input is not modified.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        else:
            total += card.points

    if not aces:
        return total

    total += aces - 1
    total += 11 if total <= ACE_HIGH_LIMIT else 1
    return total


def is_soft(cards: Iterable[Card]) -> bool:
    """Check if the hand has an Ace currently counted as 11."""
    cards = list(cards)
    aces = sum(1 for card in cards if card.is_ace)
    if not aces:
        return False

    hard_total = sum(card.points for card in cards)
    return hard_total - 1 <= ACE_HIGH_LIMIT


def is_bust(score: int) -> bool:
    """Check if a score is over 21."""
    return score > BLACKJACK
