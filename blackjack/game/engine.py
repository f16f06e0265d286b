"""Round engine: dealing, player draws and dealer auto-play."""

import logging
from typing import Iterable, NamedTuple

from blackjack.cards import Card, Deck, DeckExhaustedError
from blackjack.rules import DEALER_STAND_THRESHOLD, RuleSet
from blackjack.scoring import BLACKJACK, calculate_score, is_soft
from blackjack.game.events import EventEmitter, EventType

logger = logging.getLogger(__name__)


class DealtHands(NamedTuple):
    """Opening cards of a round."""

    player_cards: list[Card]
    dealer_cards: list[Card]


class Game:
    """
    The four operations a table needs: deal, score, hit and stand.

    Holds no round state of its own; the caller keeps the hands and decides
    what a score means. The deck is owned by this instance for the whole
    session.
    """

    def __init__(
        self,
        deck: Deck | None = None,
        rules: RuleSet | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            deck: Card source (a freshly shuffled Deck if not provided)
            rules: Dealer rules (standard rules if not provided)
            events: Emitter to report cards and dealer decisions on
        """
        self.deck = deck if deck is not None else Deck()
        self.rules = rules or RuleSet()
        self.events = events or EventEmitter()

    def start_game(self) -> DealtHands:
        """
        Reshuffle the full deck and deal the opening cards.

        Cards go player, dealer, player, dealer. The dealer's second card
        (the hole card) is dealt face down.
        """
        self.deck.reset()
        self.events.emit_new(EventType.DECK_SHUFFLED)

        player_cards = [self._draw("player")]
        dealer_cards = [self._draw("dealer")]
        player_cards.append(self._draw("player"))
        dealer_cards.append(self._draw("dealer", face_up=False))

        return DealtHands(player_cards, dealer_cards)

    def calculate_score(self, cards: Iterable[Card]) -> int:
        """Score a hand."""
        return calculate_score(cards)

    def hit(self) -> Card:
        """Draw one face-up card for the player."""
        return self._draw("player")

    def stand(self, dealer_cards: Iterable[Card], player_score: int) -> list[Card]:
        """
        Play out the dealer's hand against a standing player.

        The dealer draws face-up cards while its score is at or below the
        stand threshold of 17 and still below the player's score. The given
        cards are not modified and keep their visibility.

        Args:
            dealer_cards: The dealer's current cards
            player_score: The player's final score

        Returns:
            The dealer's final hand: the original cards followed by any drawn
        """
        hand = list(dealer_cards)
        score = calculate_score(hand)

        while self._dealer_should_hit(hand, score, player_score):
            card = self._draw("dealer")
            hand.append(card)
            score = calculate_score(hand)
            self.events.emit_new(EventType.DEALER_HITS, card=str(card), hand_value=score)

        logger.debug("Dealer stands on %d against %d", score, player_score)
        self.events.emit_new(EventType.DEALER_STANDS, hand_value=score)
        return hand

    def _dealer_should_hit(
        self, hand: list[Card], score: int, player_score: int
    ) -> bool:
        """Determine if dealer should draw another card."""
        if score >= player_score:
            return False
        if score <= DEALER_STAND_THRESHOLD:
            return True
        # A soft total may still drop to a hard one, so chase the player
        return self.rules.soft_hand_redraw and score < BLACKJACK and is_soft(hand)

    def _draw(self, hand: str, face_up: bool = True) -> Card:
        """Draw a card for the named hand, failing the round if none are left."""
        card = self.deck.draw(face_up)
        if card is None:
            logger.debug("Deck exhausted while drawing for the %s", hand)
            raise DeckExhaustedError(f"No cards left to draw for the {hand}")

        self.events.emit_new(EventType.CARD_DEALT, card=str(card), hand=hand)
        return card
