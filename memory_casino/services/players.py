"""Player persistence on top of Flask-SQLAlchemy.

Every database failure is rolled back. Constraint violations surface as
StoreRejected, which a retry cannot fix; everything else is
StoreUnavailable so callers can retry without inspecting SQLAlchemy
exceptions.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from memory_casino import db
from memory_casino.errors import PlayerNotFound, StoreRejected, StoreUnavailable
from memory_casino.models import Player

logger = logging.getLogger(__name__)


class PlayerStore:

    def get(self, player_id: int) -> Player:
        try:
            player = db.session.get(Player, player_id)
        except SQLAlchemyError as exc:
            self._fail('get', exc)
        if player is None:
            raise PlayerNotFound(f'Player {player_id} not found')
        return player

    def create(self, name: str, coins: int) -> Player:
        player = Player(name=name, coins=coins, score=0, games_played=0, games_won=0)
        self.save(player)
        logger.info(f"[player-create] player={player.id} name={name!r} coins={coins}")
        return player

    def save(self, player: Player) -> None:
        try:
            db.session.add(player)
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            logger.error(f"[store-reject] op=save error={exc.orig}")
            raise StoreRejected('Player record violates a store constraint') from exc
        except SQLAlchemyError as exc:
            self._fail('save', exc)

    def list(self) -> list:
        """All players, highest score first; ties keep id order."""
        try:
            return Player.query.order_by(Player.score.desc(), Player.id.asc()).all()
        except SQLAlchemyError as exc:
            self._fail('list', exc)

    def _fail(self, op: str, exc: Exception):
        db.session.rollback()
        logger.error(f"[store-error] op={op} error={exc}")
        raise StoreUnavailable('Player store is unavailable, try again') from exc
