"""
In-memory store
Holds every solo game and duel in memory, plus a scoreboard.
Nothing survives a restart.
"""

import logging
from dataclasses import dataclass, replace
from threading import RLock
from typing import Dict, Optional

from .game import DuelGame, GuessEntry, SoloGame
from .types import Code

logger = logging.getLogger(__name__)


# Scoreboard structure
@dataclass
class Stats:
    games_started: int = 0
    games_won: int = 0
    games_lost: int = 0

    current_streak: int = 0
    best_streak: int = 0

    total_guesses_in_wins: int = 0
    fastest_win_guesses: Optional[int] = None

    duels_started: int = 0
    p1_wins: int = 0
    p2_wins: int = 0
    draws: int = 0


class GameStore:
    """
    One lock around every read-modify-write, so each submission is
    processed to completion before the next one is looked at.
    """

    def __init__(self) -> None:
        self._solo: Dict[str, SoloGame] = {}
        self._duels: Dict[str, DuelGame] = {}
        self._lock = RLock()
        self._stats = Stats()

    # --- Solo ---

    def create_solo(self, secret: Code) -> SoloGame:
        game = SoloGame(secret=secret)
        with self._lock:
            self._solo[game.id] = game
            self._stats.games_started += 1
        logger.info("solo game %s started (%d guesses)", game.id, game.guesses_remaining)
        return game

    def get_solo(self, game_id: str) -> Optional[SoloGame]:
        with self._lock:
            return self._solo.get(game_id)

    def guess_solo(self, game_id: str, attempt: Code) -> Optional[tuple[SoloGame, Optional[GuessEntry]]]:
        """Returns (game, entry); entry is None when the game had already ended."""
        with self._lock:
            game = self._solo.get(game_id)
            if game is None:
                return None

            old_status = game.status
            entry = game.guess(attempt)

            # Update scoreboard exactly once, on the transition out of "playing"
            if old_status == "playing" and game.status != "playing":
                self._update_stats_on_solo_end(game)
            return game, entry

    def reset_solo(self, game_id: str, secret: Code) -> Optional[SoloGame]:
        with self._lock:
            game = self._solo.get(game_id)
            if game is None:
                return None
            game.reset(secret)
            self._stats.games_started += 1
        logger.info("solo game %s restarted", game_id)
        return game

    def _update_stats_on_solo_end(self, game: SoloGame) -> None:
        if game.status == "won":
            self._stats.games_won += 1

            # streaks
            self._stats.current_streak += 1
            if self._stats.current_streak > self._stats.best_streak:
                self._stats.best_streak = self._stats.current_streak

            # guesses used
            guesses_used = game.max_guesses - game.guesses_remaining
            self._stats.total_guesses_in_wins += guesses_used
            if self._stats.fastest_win_guesses is None or guesses_used < self._stats.fastest_win_guesses:
                self._stats.fastest_win_guesses = guesses_used
        else:
            self._stats.games_lost += 1
            self._stats.current_streak = 0
        logger.info("solo game %s %s after %d guess(es)", game.id, game.status, len(game.history))

    # --- Duel ---

    def create_duel(self) -> DuelGame:
        duel = DuelGame()
        with self._lock:
            self._duels[duel.id] = duel
            self._stats.duels_started += 1
        logger.info("duel %s created (%d turns)", duel.id, duel.max_turns)
        return duel

    def get_duel(self, duel_id: str) -> Optional[DuelGame]:
        with self._lock:
            return self._duels.get(duel_id)

    def submit_duel_code(self, duel_id: str, code: Code) -> Optional[DuelGame]:
        with self._lock:
            duel = self._duels.get(duel_id)
            if duel is None:
                return None
            duel.submit_code(code)
            return duel

    def guess_duel(self, duel_id: str, attempt: Code) -> Optional[tuple[DuelGame, Optional[GuessEntry]]]:
        """Returns (duel, entry); entry is None when the duel was already over."""
        with self._lock:
            duel = self._duels.get(duel_id)
            if duel is None:
                return None

            entry = duel.guess(attempt)
            if entry is not None and duel.status == "over":
                self._update_stats_on_duel_end(duel)
            return duel, entry

    def reset_duel(self, duel_id: str) -> Optional[DuelGame]:
        with self._lock:
            duel = self._duels.get(duel_id)
            if duel is None:
                return None
            duel.reset()
            self._stats.duels_started += 1
        logger.info("duel %s reset", duel_id)
        return duel

    def _update_stats_on_duel_end(self, duel: DuelGame) -> None:
        if duel.winner == "P1":
            self._stats.p1_wins += 1
        elif duel.winner == "P2":
            self._stats.p2_wins += 1
        else:
            self._stats.draws += 1
        logger.info("duel %s over on turn %d, winner=%s", duel.id, duel.turn, duel.winner)

    # --- Stats ---

    def get_stats(self) -> Stats:
        """A snapshot, so callers can read several counters that agree with each other."""
        with self._lock:
            return replace(self._stats)

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = Stats()
