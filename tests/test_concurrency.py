import threading

import pytest

from memory_casino import create_app, db
from memory_casino.services.games.session import Outcome

from conftest import TestConfig
from helpers import FakeClock, ordered_deck, pair_ids


@pytest.fixture()
def file_app(tmp_path):
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'casino.db'}"

    application = create_app(FileConfig)
    with application.app_context():
        db.create_all()
        service = application.extensions['memory_casino']
        service.clock = FakeClock()
        service.deck_factory = ordered_deck
        yield application
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


def flip_together(app, player_id, card_ids, errors):
    service = app.extensions['memory_casino']
    barrier = threading.Barrier(len(card_ids))

    def worker(card_id):
        with app.app_context():
            barrier.wait()
            try:
                service.flip_card(player_id, card_id)
            except Exception as exc:
                errors.append(exc)

    threads = [threading.Thread(target=worker, args=(card_id,)) for card_id in card_ids]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)


def test_concurrent_flips_for_one_player_are_serialized(file_app):
    service = file_app.extensions['memory_casino']
    player = service.store.create('Alice', coins=1000)
    service.start_game(player.id, 'hard')

    errors = []
    for pair in pair_ids('hard'):
        flip_together(file_app, player.id, pair, errors)

    assert errors == []
    session = service.registry.get(player.id)
    assert session.outcome is Outcome.WON
    assert session.pending_flips == []

    db.session.expire_all()
    refreshed = service.store.get(player.id)
    # 8 pairs: +800 score, +1600 coins; win: +500 score, +1000 coins
    # achievements: Hard level 300, Memory master 1000, Quick win 500, First game 100
    assert refreshed.score == 1300
    assert refreshed.coins == 1000 - 80 + 1600 + 1000 + 300 + 1000 + 500 + 100
    assert refreshed.games_played == 1
    assert refreshed.games_won == 1
