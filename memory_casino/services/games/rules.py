"""Game rules that are independent from HTTP and the database.

Difficulty settings, rewards and thresholds live here so the session
state machine and the achievement engine read from one table.
"""

from enum import Enum

from memory_casino.errors import InvalidDifficulty

MATCH_SCORE = 100
MATCH_COINS = 200
WIN_SCORE = 500
WIN_COINS = 1000
QUICK_WIN_SECONDS = 60


class Difficulty(str, Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'

    @classmethod
    def parse(cls, value) -> 'Difficulty':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidDifficulty(f"Unknown difficulty: {value!r}") from None

    @property
    def deck_size(self) -> int:
        return _SETTINGS[self][0]

    @property
    def cost(self) -> int:
        return _SETTINGS[self][1]

    @property
    def time_limit(self) -> int:
        return _SETTINGS[self][2]


# difficulty -> (deck size, entry cost in coins, time limit in seconds)
_SETTINGS = {
    Difficulty.EASY: (8, 30, 300),
    Difficulty.MEDIUM: (12, 50, 240),
    Difficulty.HARD: (16, 80, 180),
}
