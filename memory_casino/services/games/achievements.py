"""Achievement catalog and rule evaluation.

`evaluate` is pure: it looks at a snapshot of the player's history and
one trigger event, and returns the awards that are newly earned. Applying
them (recording the title, crediting coins) is left to `apply_awards`
so the caller decides when the player row is mutated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from .rules import Difficulty, QUICK_WIN_SECONDS


class AchievementKind(str, Enum):
    FIRST_GAME = 'First game'
    FIVE_GAMES = '5 games played'
    TEN_GAMES = '10 games played'
    QUICK_WIN = 'Quick win'
    HARD_LEVEL = 'Hard level'
    MEMORY_MASTER = 'Memory master'

    @property
    def reward(self) -> int:
        return REWARDS[self]


REWARDS = {
    AchievementKind.FIRST_GAME: 100,
    AchievementKind.FIVE_GAMES: 200,
    AchievementKind.TEN_GAMES: 500,
    AchievementKind.QUICK_WIN: 500,
    AchievementKind.HARD_LEVEL: 300,
    AchievementKind.MEMORY_MASTER: 1000,
}


class Trigger(str, Enum):
    GAMES_PLAYED = 'games_played'
    GAME_WON = 'game_won'
    SESSION_STARTED = 'session_started'
    PAIR_MATCHED = 'pair_matched'
    ALL_MATCHED = 'all_matched'


@dataclass(frozen=True)
class PlayerHistory:
    games_played: int
    held: FrozenSet[AchievementKind]


@dataclass(frozen=True)
class TriggerEvent:
    trigger: Trigger
    difficulty: Optional[Difficulty] = None
    all_matched: bool = False
    elapsed: Optional[float] = None


@dataclass(frozen=True)
class AchievementAward:
    kind: AchievementKind

    @property
    def coins(self) -> int:
        return self.kind.reward


def _candidates(history: PlayerHistory, event: TriggerEvent):
    trigger = event.trigger
    if trigger is Trigger.GAMES_PLAYED:
        if history.games_played >= 5:
            yield AchievementKind.FIVE_GAMES
        if history.games_played >= 10:
            yield AchievementKind.TEN_GAMES
    elif trigger is Trigger.GAME_WON:
        yield AchievementKind.FIRST_GAME
    elif trigger is Trigger.SESSION_STARTED:
        if event.difficulty is Difficulty.HARD:
            yield AchievementKind.HARD_LEVEL
    elif trigger is Trigger.PAIR_MATCHED:
        if event.all_matched:
            yield AchievementKind.MEMORY_MASTER
    elif trigger is Trigger.ALL_MATCHED:
        if event.elapsed is not None and event.elapsed < QUICK_WIN_SECONDS:
            yield AchievementKind.QUICK_WIN


def evaluate(history: PlayerHistory, event: TriggerEvent) -> FrozenSet[AchievementAward]:
    """Return awards earned by `event` that the player does not already hold."""
    return frozenset(
        AchievementAward(kind)
        for kind in _candidates(history, event)
        if kind not in history.held
    )


def apply_awards(player, awards: Iterable[AchievementAward]) -> list:
    """Record each award on the player and credit its coins once.

    Returns the kinds actually granted, in catalog order.
    """
    granted = []
    for award in sorted(awards, key=lambda a: list(AchievementKind).index(a.kind)):
        if player.has_achievement(award.kind):
            continue
        player.add_achievement(award.kind)
        player.coins += award.coins
        granted.append(award.kind)
    return granted


def trigger(player, event: TriggerEvent) -> list:
    """Evaluate against the player's current history and apply the result."""
    return apply_awards(player, evaluate(player.history(), event))
