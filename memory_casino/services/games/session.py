"""One player's memory-game session.

State pipeline: not_started -> active -> finished. `finished` is terminal;
a new game is a new GameSession. The session knows nothing about the
player record: rewards are applied by the service from the FlipResult.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from memory_casino.errors import CardNotFound, CardUnavailable, SessionExpired, SessionNotActive
from .deck import Card
from .rules import Difficulty


class SessionState(str, Enum):
    NOT_STARTED = 'not_started'
    ACTIVE = 'active'
    FINISHED = 'finished'


class Outcome(str, Enum):
    WON = 'won'
    LOST = 'lost'
    EXPIRED = 'expired'


@dataclass
class FlipResult:
    card_id: int
    # (id, value) of both cards once a pair was evaluated, else None
    revealed: Optional[Tuple[Tuple[int, str], Tuple[int, str]]] = None
    matched: Optional[bool] = None
    all_matched: bool = False

    @property
    def resolved(self) -> bool:
        return self.revealed is not None

    def to_dict(self):
        return {
            'card_id': self.card_id,
            'resolved': self.resolved,
            'matched': self.matched,
            'revealed': [{'id': cid, 'value': value} for cid, value in self.revealed] if self.revealed else [],
            'all_matched': self.all_matched,
        }


@dataclass
class GameSession:
    player_id: int
    difficulty: Difficulty
    cards: List[Card]
    time_limit: int
    state: SessionState = SessionState.NOT_STARTED
    pending_flips: List[int] = field(default_factory=list)
    # monotonic clock readings, used for elapsed time
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    # wall-clock timestamps, reported to clients
    started_at: Optional[float] = None
    ended_at: Optional[float] = None
    outcome: Optional[Outcome] = None

    @classmethod
    def create(cls, player_id: int, difficulty: Difficulty, cards: List[Card]) -> 'GameSession':
        if len(cards) % 2:
            raise ValueError('Deck must contain an even number of cards')
        return cls(
            player_id=player_id,
            difficulty=difficulty,
            cards=cards,
            time_limit=difficulty.time_limit,
        )

    @property
    def started(self) -> bool:
        return self.state is not SessionState.NOT_STARTED

    @property
    def finished(self) -> bool:
        return self.state is SessionState.FINISHED

    @property
    def active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def begin(self, now: float, wall: Optional[float] = None) -> None:
        if self.started:
            raise SessionNotActive('Session already started')
        self.state = SessionState.ACTIVE
        self.start_time = now
        self.started_at = wall

    def copy(self) -> 'GameSession':
        return copy.deepcopy(self)

    # ---- time ----

    def elapsed(self, now: float) -> float:
        if self.start_time is None:
            return 0.0
        until = self.end_time if self.end_time is not None else now
        return max(0.0, until - self.start_time)

    def time_remaining(self, now: float) -> int:
        return max(0, self.time_limit - int(self.elapsed(now)))

    def is_expired(self, now: float) -> bool:
        return self.active and self.elapsed(now) > self.time_limit

    # ---- cards ----

    def card(self, card_id: int) -> Card:
        for card in self.cards:
            if card.id == card_id:
                return card
        raise CardNotFound(f'Card {card_id} not found')

    def all_matched(self) -> bool:
        return all(card.matched for card in self.cards)

    def flip(self, card_id: int, now: float, wall: Optional[float] = None) -> FlipResult:
        """Turn a card face up and evaluate the pair once two are pending.

        An expired session is finished as a loss before SessionExpired is
        raised, so the caller must still record the result.
        """
        if not self.active:
            raise SessionNotActive('Game not started or already finished')
        if self.is_expired(now):
            self.finish(Outcome.EXPIRED, now, wall)
            raise SessionExpired('Game time is over')

        card = self.card(card_id)
        if card.matched or card.flipped:
            raise CardUnavailable(f'Card {card_id} is already flipped or matched')

        card.flipped = True
        self.pending_flips.append(card.id)
        result = FlipResult(card_id=card.id)
        if len(self.pending_flips) == 2:
            self._resolve_pair(result)
        return result

    def _resolve_pair(self, result: FlipResult) -> None:
        first, second = (self.card(cid) for cid in self.pending_flips)
        result.revealed = ((first.id, first.value), (second.id, second.value))
        result.matched = first.value == second.value
        if result.matched:
            first.matched = second.matched = True
        else:
            first.flipped = second.flipped = False
        self.pending_flips.clear()
        result.all_matched = self.all_matched()

    # ---- end ----

    def finish(self, outcome: Outcome, now: float, wall: Optional[float] = None) -> None:
        if not self.active:
            raise SessionNotActive('Game not started or already finished')
        self.state = SessionState.FINISHED
        self.outcome = outcome
        self.end_time = now
        self.ended_at = wall
        self.pending_flips.clear()

    def to_dict(self, now: float):
        return {
            'player_id': self.player_id,
            'difficulty': self.difficulty.value,
            'state': self.state.value,
            'started': self.started,
            'finished': self.finished,
            'outcome': self.outcome.value if self.outcome else None,
            'cards': [card.to_dict() for card in self.cards],
            'pending_flips': list(self.pending_flips),
            'start_time': self.started_at,
            'end_time': self.ended_at,
            'time_limit': self.time_limit,
            'time_left': self.time_remaining(now),
            'pairs_left': sum(1 for card in self.cards if not card.matched) // 2,
        }
