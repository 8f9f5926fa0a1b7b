"""
Testing in-memory store
- Create games, make guesses, and check status/guesses/history/scoreboard.
"""

import pytest

from codeduel.errors import InvalidUniquenessError
from codeduel.store import GameStore

def test_store_create_and_guess_solo_basic():
    store = GameStore()

    # Secret is hardcoded so we know what outcome should be
    game = store.create_solo("123")
    game_id = game.id

    assert game.status == "playing"
    assert game.guesses_remaining == 10

    # Wrong guess -> guesses decrement, history grows
    store.guess_solo(game_id, "456")
    game_after = store.get_solo(game_id)
    assert game_after.guesses_remaining == 9
    assert len(game_after.history) == 1
    assert game_after.status == "playing"

    # Winning guess ends the game
    store.guess_solo(game_id, "123")
    game_win = store.get_solo(game_id)
    assert game_win.status == "won"
    assert game_win.guesses_remaining == 8

def test_store_unknown_ids_return_none():
    store = GameStore()
    assert store.get_solo("nope") is None
    assert store.guess_solo("nope", "123") is None
    assert store.reset_solo("nope", "123") is None
    assert store.get_duel("nope") is None
    assert store.submit_duel_code("nope", "123") is None
    assert store.guess_duel("nope", "123") is None
    assert store.reset_duel("nope") is None

def test_store_invalid_guess_propagates_and_keeps_state():
    store = GameStore()
    game = store.create_solo("123")
    with pytest.raises(InvalidUniquenessError):
        store.guess_solo(game.id, "112")
    assert store.get_solo(game.id).guesses_remaining == 10
    assert store.get_stats().games_lost == 0

def test_store_solo_stats_update_on_win_and_loss():
    store = GameStore()

    # Game A: win in 2 guesses
    game_a = store.create_solo("123")
    store.guess_solo(game_a.id, "456")  # wrong
    store.guess_solo(game_a.id, "123")  # win

    stats_after_win = store.get_stats()
    assert stats_after_win.games_started == 1
    assert stats_after_win.games_won == 1
    assert stats_after_win.games_lost == 0
    assert stats_after_win.current_streak == 1
    assert stats_after_win.total_guesses_in_wins == 2
    assert stats_after_win.fastest_win_guesses == 2

    # Extra guesses after the win must not count again
    store.guess_solo(game_a.id, "123")
    assert store.get_stats().games_won == 1

    # Game B: force a loss
    game_b = store.create_solo("789")
    for _ in range(10):
        store.guess_solo(game_b.id, "012")

    stats_final = store.get_stats()
    assert stats_final.games_started == 2
    assert stats_final.games_won == 1
    assert stats_final.games_lost == 1
    assert stats_final.current_streak == 0
    assert stats_final.best_streak == 1

def test_store_duel_flow_and_stats():
    store = GameStore()
    duel = store.create_duel()

    store.submit_duel_code(duel.id, "123")
    store.submit_duel_code(duel.id, "456")

    # P1 misses, P2 cracks P1's code
    _, entry = store.guess_duel(duel.id, "789")
    assert entry.bulls == 0
    updated, entry = store.guess_duel(duel.id, "123")
    assert entry.bulls == 3
    assert updated.status == "over"
    assert updated.winner == "P2"

    # Ignored guess after the end: no entry, no double counting
    _, entry = store.guess_duel(duel.id, "456")
    assert entry is None

    stats = store.get_stats()
    assert stats.duels_started == 1
    assert stats.p2_wins == 1
    assert stats.p1_wins == 0
    assert stats.draws == 0

def test_store_duel_draw_and_reset():
    store = GameStore()
    duel = store.create_duel()
    store.submit_duel_code(duel.id, "123")
    store.submit_duel_code(duel.id, "456")
    for _ in range(10):
        store.guess_duel(duel.id, "789")
        store.guess_duel(duel.id, "789")

    assert store.get_duel(duel.id).winner == "draw"
    assert store.get_stats().draws == 1

    reset = store.reset_duel(duel.id)
    assert reset.status == "setting_p1"
    assert store.get_stats().duels_started == 2

def test_store_reset_stats():
    store = GameStore()
    game = store.create_solo("123")
    store.guess_solo(game.id, "123")
    store.reset_stats()

    stats = store.get_stats()
    assert stats.games_started == 0
    assert stats.games_won == 0
    assert stats.fastest_win_guesses is None

def test_store_guess_solo_reports_ignored_guess():
    store = GameStore()
    game = store.create_solo("123")

    _, entry = store.guess_solo(game.id, "123")
    assert entry.bulls == 3

    # the game is over, so this guess is dropped: no entry, no new history
    updated, entry = store.guess_solo(game.id, "456")
    assert entry is None
    assert updated.status == "won"
    assert len(updated.history) == 1

def test_store_get_stats_returns_a_snapshot():
    store = GameStore()
    before = store.get_stats()

    game = store.create_solo("123")
    store.guess_solo(game.id, "123")

    # the earlier read does not move underneath the caller
    assert before.games_started == 0
    assert before.games_won == 0
    assert store.get_stats().games_won == 1
