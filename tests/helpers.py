from memory_casino.services.games.deck import Card, build_symbols
from memory_casino.services.games.rules import Difficulty


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def ordered_deck(difficulty):
    """Unshuffled deck: ids 1,2 hold 'A', ids 3,4 hold 'B', and so on."""
    difficulty = Difficulty.parse(difficulty)
    cards = []
    for symbol in build_symbols(difficulty.deck_size // 2):
        cards.append(Card(id=len(cards) + 1, value=symbol))
        cards.append(Card(id=len(cards) + 1, value=symbol))
    return cards


def pair_ids(difficulty):
    """Card id pairs of an ordered deck, in match order."""
    size = Difficulty.parse(difficulty).deck_size
    return [(i, i + 1) for i in range(1, size + 1, 2)]
