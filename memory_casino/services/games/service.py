"""Game orchestration: sessions, rewards and player bookkeeping.

Each operation runs under the player's lock stripe and works on a copy of
the published session. The copy replaces the published session only after
the player row was committed, so a failed commit leaves the registry as it
was before the request.
"""

import logging
import time
from typing import Callable, List, Optional, Tuple

from memory_casino.errors import GameError, InsufficientFunds, SessionExpired, SessionNotActive
from . import achievements
from .achievements import Trigger, TriggerEvent
from .deck import generate_deck
from .registry import SessionRegistry
from .rules import Difficulty, MATCH_COINS, MATCH_SCORE, WIN_COINS, WIN_SCORE
from .session import FlipResult, GameSession, Outcome

logger = logging.getLogger(__name__)


class GameService:

    def __init__(
        self,
        store,
        registry: Optional[SessionRegistry] = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
        deck_factory: Callable = generate_deck,
        default_difficulty: str = Difficulty.MEDIUM.value,
    ):
        self.store = store
        self.registry = registry if registry is not None else SessionRegistry()
        self.clock = clock
        self.wall_clock = wall_clock
        self.deck_factory = deck_factory
        self.default_difficulty = Difficulty.parse(default_difficulty)

    # ---- operations ----

    def start_game(self, player_id: int, difficulty=None) -> GameSession:
        difficulty = Difficulty.parse(difficulty or self.default_difficulty)
        with self.registry.lock_for(player_id):
            player = self.store.get(player_id)
            if player.coins < difficulty.cost:
                raise InsufficientFunds(
                    f'{difficulty.value} costs {difficulty.cost} coins, player has {player.coins}'
                )
            now = self.clock()
            session = GameSession.create(player_id, difficulty, self.deck_factory(difficulty))
            session.begin(now, self.wall_clock())

            player.coins -= difficulty.cost
            granted = achievements.trigger(player, TriggerEvent(Trigger.SESSION_STARTED, difficulty=difficulty))
            self.store.save(player)

            previous = self.registry.put(session)
        if previous is not None and previous.active:
            logger.info(f"[start] player={player_id} discarded unfinished {previous.difficulty.value} session")
        logger.info(
            f"[start] player={player_id} difficulty={difficulty.value} cost={difficulty.cost} "
            f"achievements={[k.value for k in granted]}"
        )
        return session

    def flip_card(self, player_id: int, card_id: int) -> Tuple[GameSession, FlipResult]:
        with self.registry.lock_for(player_id):
            current = self._require_session(player_id)
            if not current.active:
                raise SessionNotActive('Game not started or already finished')
            player = self.store.get(player_id)
            now = self.clock()
            work = current.copy()
            try:
                result = work.flip(card_id, now, self.wall_clock())
            except SessionExpired:
                self._record_finish(player, work)
                self.store.save(player)
                self.registry.put(work)
                logger.info(f"[expire] player={player_id} on flip card={card_id}")
                raise

            if result.matched:
                player.score += MATCH_SCORE
                player.coins += MATCH_COINS
                achievements.trigger(player, TriggerEvent(Trigger.PAIR_MATCHED, all_matched=result.all_matched))
            if result.all_matched:
                achievements.trigger(player, TriggerEvent(Trigger.ALL_MATCHED, elapsed=work.elapsed(now)))
                work.finish(Outcome.WON, now, self.wall_clock())
                self._record_finish(player, work)
            if result.resolved:
                self.store.save(player)

            self.registry.put(work)
        if result.all_matched:
            logger.info(f"[finish] player={player_id} won in {work.elapsed(now):.1f}s")
        return work, result

    def get_state(self, player_id: int) -> GameSession:
        """Current session; an active session past its limit is finished as a loss first."""
        with self.registry.lock_for(player_id):
            session = self._require_session(player_id)
            now = self.clock()
            if session.is_expired(now):
                session = self._finish_now(player_id, session, Outcome.EXPIRED, now)
                logger.info(f"[expire] player={player_id} on state read")
            return session

    def end_game(self, player_id: int) -> GameSession:
        """Abandon the active session as a loss. Ending a finished session is a no-op."""
        with self.registry.lock_for(player_id):
            session = self._require_session(player_id)
            if session.finished:
                return session
            now = self.clock()
            outcome = Outcome.EXPIRED if session.is_expired(now) else Outcome.LOST
            session = self._finish_now(player_id, session, outcome, now)
        logger.info(f"[end] player={player_id} outcome={session.outcome.value}")
        return session

    def sweep_expired(self) -> List[int]:
        """Finish every expired active session; returns the affected player ids."""
        expired = []
        for player_id in self.registry.active_player_ids():
            with self.registry.lock_for(player_id):
                session = self.registry.get(player_id)
                now = self.clock()
                if session is None or not session.is_expired(now):
                    continue
                try:
                    self._finish_now(player_id, session, Outcome.EXPIRED, now)
                except GameError as exc:
                    logger.warning(f"[sweep-skip] player={player_id} error={exc.code}: {exc.message}")
                    continue
            expired.append(player_id)
        if expired:
            logger.info(f"[sweep] expired sessions for players={expired}")
        return expired

    def active_count(self) -> int:
        return self.registry.active_count()

    def now(self) -> float:
        return self.clock()

    # ---- helpers ----

    def _require_session(self, player_id: int) -> GameSession:
        session = self.registry.get(player_id)
        if session is None:
            raise SessionNotActive(f'No game session for player {player_id}')
        return session

    def _finish_now(self, player_id: int, session: GameSession, outcome: Outcome, now: float) -> GameSession:
        player = self.store.get(player_id)
        work = session.copy()
        work.finish(outcome, now, self.wall_clock())
        self._record_finish(player, work)
        self.store.save(player)
        self.registry.put(work)
        return work

    @staticmethod
    def _record_finish(player, session: GameSession) -> None:
        won = session.outcome is Outcome.WON
        if won:
            player.coins += WIN_COINS
            player.score += WIN_SCORE
            player.games_won = (player.games_won or 0) + 1
            achievements.trigger(player, TriggerEvent(Trigger.GAME_WON))
        player.games_played = (player.games_played or 0) + 1
        achievements.trigger(player, TriggerEvent(Trigger.GAMES_PLAYED))
