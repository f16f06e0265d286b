"""Round engine, table driver and state management."""

from blackjack.game.events import GameEvent, EventType, EventEmitter
from blackjack.game.state import RoundPhase, RoundState
from blackjack.game.engine import DealtHands, Game
from blackjack.game.table import BlackjackTable

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "RoundPhase",
    "RoundState",
    "DealtHands",
    "Game",
    "BlackjackTable",
]
