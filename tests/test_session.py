import pytest

from memory_casino.errors import CardNotFound, CardUnavailable, SessionExpired, SessionNotActive
from memory_casino.services.games.rules import Difficulty
from memory_casino.services.games.session import GameSession, Outcome, SessionState

from helpers import ordered_deck

T0 = 5_000.0


def started(difficulty=Difficulty.MEDIUM):
    session = GameSession.create(1, difficulty, ordered_deck(difficulty))
    session.begin(T0)
    return session


def test_new_session_is_not_started():
    session = GameSession.create(1, Difficulty.EASY, ordered_deck('easy'))
    assert session.state is SessionState.NOT_STARTED
    with pytest.raises(SessionNotActive):
        session.flip(1, T0)


def test_begin_sets_limit_and_start_time():
    session = started(Difficulty.HARD)
    assert session.active
    assert session.time_limit == 180
    assert session.start_time == T0
    assert len(session.cards) == 16


def test_flipping_same_card_twice_is_rejected():
    session = started()
    session.flip(1, T0)
    with pytest.raises(CardUnavailable):
        session.flip(1, T0)
    assert session.pending_flips == [1]


def test_matching_pair_marks_both_cards():
    session = started()
    first = session.flip(1, T0)
    assert not first.resolved
    assert session.pending_flips == [1]

    result = session.flip(2, T0 + 1)
    assert result.matched is True
    assert result.revealed == ((1, 'A'), (2, 'A'))
    assert session.card(1).matched and session.card(2).matched
    assert session.pending_flips == []
    assert not result.all_matched


def test_mismatch_turns_cards_face_down_again():
    session = started()
    session.flip(1, T0)
    result = session.flip(3, T0)
    assert result.matched is False
    assert result.revealed == ((1, 'A'), (3, 'B'))
    assert session.pending_flips == []
    assert not session.card(1).flipped and not session.card(3).flipped
    # Both cards can be played again
    session.flip(1, T0)
    assert session.flip(2, T0).matched


def test_matched_card_is_unavailable():
    session = started()
    session.flip(1, T0)
    session.flip(2, T0)
    with pytest.raises(CardUnavailable):
        session.flip(2, T0)


def test_unknown_card():
    session = started()
    with pytest.raises(CardNotFound):
        session.flip(99, T0)


def test_all_matched_after_last_pair():
    session = started(Difficulty.EASY)
    result = None
    for card_id in range(1, 9):
        result = session.flip(card_id, T0)
    assert result.all_matched
    assert session.all_matched()


def test_flip_after_limit_finishes_session():
    session = started()
    with pytest.raises(SessionExpired):
        session.flip(1, T0 + 241)
    assert session.finished
    assert session.outcome is Outcome.EXPIRED
    assert session.end_time == T0 + 241
    with pytest.raises(SessionNotActive):
        session.flip(1, T0 + 242)


def test_flip_exactly_at_limit_is_allowed():
    session = started()
    session.flip(1, T0 + 240)
    assert session.pending_flips == [1]


def test_finish_is_terminal():
    session = started()
    session.finish(Outcome.LOST, T0 + 10)
    with pytest.raises(SessionNotActive):
        session.finish(Outcome.WON, T0 + 20)
    assert session.end_time == T0 + 10


def test_time_remaining():
    session = started()
    assert session.time_remaining(T0) == 240
    assert session.time_remaining(T0 + 100.5) == 140
    assert session.time_remaining(T0 + 1000) == 0
    session.finish(Outcome.LOST, T0 + 40)
    # Frozen at finish time
    assert session.time_remaining(T0 + 1000) == 200


def test_copy_is_independent():
    session = started()
    work = session.copy()
    work.flip(1, T0)
    assert session.pending_flips == []
    assert not session.card(1).flipped


def test_to_dict_reports_time_left_and_hides_values():
    session = started()
    session.flip(5, T0)
    payload = session.to_dict(T0 + 40)
    assert payload['time_left'] == 200
    assert payload['pending_flips'] == [5]
    values = {c['id']: c['value'] for c in payload['cards']}
    assert values[5] == 'C'
    assert values[6] is None
    assert payload['pairs_left'] == 6


def test_reported_times_come_from_wall_clock():
    session = GameSession.create(1, Difficulty.EASY, ordered_deck('easy'))
    session.begin(T0, wall=1_700_000_000.0)
    session.finish(Outcome.LOST, T0 + 30, wall=1_700_000_030.0)
    payload = session.to_dict(T0 + 30)
    assert payload['start_time'] == 1_700_000_000.0
    assert payload['end_time'] == 1_700_000_030.0
    assert session.elapsed(T0 + 99) == 30
