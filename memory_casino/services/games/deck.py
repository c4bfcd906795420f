import random
from dataclasses import dataclass
from typing import List, Optional

from .rules import Difficulty

BASE_SYMBOLS = ['A', 'B', 'C', 'D', 'E', 'F', 'G', 'H']

_system_random = random.SystemRandom()


@dataclass
class Card:
    id: int
    value: str
    flipped: bool = False
    matched: bool = False

    @property
    def face_up(self) -> bool:
        return self.flipped or self.matched

    def to_dict(self):
        return {
            'id': self.id,
            # Face-down cards do not reveal their symbol
            'value': self.value if self.face_up else None,
            'flipped': self.flipped,
            'matched': self.matched,
        }


def build_symbols(pairs: int) -> List[str]:
    """Return `pairs` distinct symbols, suffixing base symbols when the alphabet runs out."""
    symbols = list(BASE_SYMBOLS)
    i = 0
    while len(symbols) < pairs:
        symbols.append(symbols[i] + "'")
        i += 1
    return symbols[:pairs]


def generate_deck(difficulty, rng: Optional[random.Random] = None) -> List[Card]:
    """Build a shuffled deck with every symbol appearing exactly twice.

    Ids run from 1 in shuffled order. The default shuffle source is
    SystemRandom so consecutive decks are not reproducible.
    """
    difficulty = Difficulty.parse(difficulty)
    values = []
    for symbol in build_symbols(difficulty.deck_size // 2):
        values.extend([symbol, symbol])
    (rng or _system_random).shuffle(values)
    return [Card(id=i + 1, value=value) for i, value in enumerate(values)]
