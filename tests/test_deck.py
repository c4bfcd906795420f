from collections import Counter

import pytest

from memory_casino.errors import InvalidDifficulty
from memory_casino.services.games.deck import build_symbols, generate_deck
from memory_casino.services.games.rules import Difficulty


@pytest.mark.parametrize('difficulty,size', [('easy', 8), ('medium', 12), ('hard', 16)])
def test_deck_has_two_cards_per_value(difficulty, size):
    deck = generate_deck(difficulty)
    assert len(deck) == size
    counts = Counter(card.value for card in deck)
    assert len(counts) == size // 2
    assert set(counts.values()) == {2}


def test_ids_are_sequential_from_one():
    deck = generate_deck(Difficulty.HARD)
    assert [card.id for card in deck] == list(range(1, 17))
    assert not any(card.flipped or card.matched for card in deck)


def test_consecutive_decks_are_shuffled_differently():
    orders = {tuple(card.value for card in generate_deck('medium')) for _ in range(20)}
    # 12!/(2!^6) orderings; twenty identical draws would mean no shuffle at all
    assert len(orders) > 1


def test_symbols_extend_with_suffix_when_alphabet_runs_out():
    symbols = build_symbols(10)
    assert symbols[:8] == ['A', 'B', 'C', 'D', 'E', 'F', 'G', 'H']
    assert symbols[8:] == ["A'", "B'"]
    assert len(set(symbols)) == 10


def test_unknown_difficulty_rejected():
    with pytest.raises(InvalidDifficulty):
        generate_deck('insane')


def test_difficulty_parse_is_case_insensitive():
    assert Difficulty.parse(' HARD ') is Difficulty.HARD
    assert Difficulty.MEDIUM.cost == 50
    assert Difficulty.EASY.time_limit == 300


def test_face_down_card_hides_value():
    card = generate_deck('easy')[0]
    assert card.to_dict()['value'] is None
    card.flipped = True
    assert card.to_dict()['value'] == card.value
