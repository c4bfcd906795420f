from datetime import datetime, timezone

from memory_casino import db
from memory_casino.services.games.achievements import AchievementKind, PlayerHistory


def _utcnow():
    return datetime.now(timezone.utc)


class Player(db.Model):
    __tablename__ = 'players'
    __table_args__ = (
        db.CheckConstraint('coins >= 0', name='ck_players_coins_non_negative'),
    )
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    score = db.Column(db.Integer, default=0, nullable=False)
    coins = db.Column(db.Integer, default=0, nullable=False)
    games_played = db.Column(db.Integer, default=0, nullable=False)
    games_won = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    achievements = db.relationship(
        'Achievement',
        back_populates='player',
        cascade='all, delete-orphan',
        order_by='Achievement.id',
    )

    @property
    def achievement_kinds(self):
        return frozenset(a.title for a in self.achievements)

    def has_achievement(self, kind: AchievementKind) -> bool:
        return kind in self.achievement_kinds

    def add_achievement(self, kind: AchievementKind) -> None:
        if not self.has_achievement(kind):
            self.achievements.append(Achievement(title=kind))

    def history(self) -> PlayerHistory:
        return PlayerHistory(games_played=self.games_played or 0, held=self.achievement_kinds)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'coins': self.coins,
            'games_played': self.games_played,
            'games_won': self.games_won,
            'achievements': [a.title.value for a in self.achievements],
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class Achievement(db.Model):
    __tablename__ = 'achievements'
    __table_args__ = (
        db.UniqueConstraint('player_id', 'title', name='uq_achievements_player_title'),
    )
    id = db.Column(db.Integer, primary_key=True)
    # Stored as the catalog title; CHECK constraint limits it to AchievementKind values
    title = db.Column(
        db.Enum(
            AchievementKind,
            name='achievement_title',
            values_callable=lambda kinds: [k.value for k in kinds],
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            length=32,
        ),
        nullable=False,
    )
    player_id = db.Column(db.Integer, db.ForeignKey('players.id'), nullable=False, index=True)
    player = db.relationship('Player', back_populates='achievements')

    def to_dict(self):
        return {
            'title': self.title.value,
            'reward': self.title.reward,
        }
