"""
Game state machines (no HTTP, no locking).

DuelGame: two players each set a secret, then alternate guesses.
    setting_p1 -> setting_p2 -> playing -> over
SoloGame: one player guesses a fixed opponent secret.
    playing -> won | lost

Every input is validated before anything is mutated, so a rejected code
leaves the game exactly as it was.
"""

from dataclasses import dataclass, field
from time import time
from typing import List, Optional
from uuid import uuid4

from .config import CODE_LENGTH, MAX_GUESSES, MAX_TURNS
from .engine import format_feedback, score_guess, validate_code, versus_feedback
from .errors import InvalidActionError
from .types import Code, DuelStatus, Player, SoloStatus, Winner


@dataclass
class GuessEntry:
    guess: Code
    bulls: int
    cows: int
    feedback: str
    timestamp: float = field(default_factory=time)


def _new_id() -> str:
    return str(uuid4())


@dataclass
class DuelGame:
    id: str = field(default_factory=_new_id)
    max_turns: int = MAX_TURNS
    status: DuelStatus = "setting_p1"
    turn: int = 1
    current_player: Player = "P1"
    p1_secret: Optional[Code] = None
    p2_secret: Optional[Code] = None
    # newest first
    p1_history: List[GuessEntry] = field(default_factory=list)
    p2_history: List[GuessEntry] = field(default_factory=list)
    winner: Optional[Winner] = None
    created_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)

    @property
    def setting_player(self) -> Optional[Player]:
        """Whose secret is being asked for right now, if any."""
        if self.status == "setting_p1":
            return "P1"
        if self.status == "setting_p2":
            return "P2"
        return None

    def submit_code(self, code: Code) -> None:
        if self.status not in ("setting_p1", "setting_p2"):
            raise InvalidActionError("Both secret codes are already set.")

        validate_code(code)

        if self.status == "setting_p1":
            self.p1_secret = code
            self.status = "setting_p2"
        else:
            self.p2_secret = code
            self.status = "playing"
            self.current_player = "P1"
            self.turn = 1
        self.updated_at = time()

    def guess(self, code: Code) -> Optional[GuessEntry]:
        """
        Score the current player's guess against the other player's secret.
        Returns the new history entry, or None if the duel is already over
        (extra guesses are ignored).
        """
        if self.status == "over":
            return None
        if self.status != "playing":
            raise InvalidActionError("Both players must set a secret code before guessing.")

        validate_code(code)

        if self.current_player == "P1":
            target, history = self.p2_secret, self.p1_history
        else:
            target, history = self.p1_secret, self.p2_history

        score = score_guess(target, code)
        entry = GuessEntry(guess=code, bulls=score.bulls, cows=score.cows, feedback=format_feedback(score))
        history.insert(0, entry)

        # A correct guess ends the duel on the spot, even on the last turn.
        if score.bulls == CODE_LENGTH:
            self.status = "over"
            self.winner = self.current_player
        elif self.current_player == "P1":
            self.current_player = "P2"
        elif self.turn >= self.max_turns:
            self.status = "over"
            self.winner = "draw"
        else:
            self.current_player = "P1"
            self.turn += 1

        self.updated_at = time()
        return entry

    def reset(self) -> None:
        """New game: everything back to the start except id and turn limit."""
        self.status = "setting_p1"
        self.turn = 1
        self.current_player = "P1"
        self.p1_secret = None
        self.p2_secret = None
        self.p1_history = []
        self.p2_history = []
        self.winner = None
        self.updated_at = time()


@dataclass
class SoloGame:
    secret: Code
    id: str = field(default_factory=_new_id)
    max_guesses: int = MAX_GUESSES
    guesses_remaining: int = -1
    status: SoloStatus = "playing"
    # newest first
    history: List[GuessEntry] = field(default_factory=list)
    created_at: float = field(default_factory=time)
    updated_at: float = field(default_factory=time)

    def __post_init__(self) -> None:
        validate_code(self.secret)
        if self.guesses_remaining < 0:
            self.guesses_remaining = self.max_guesses

    @property
    def revealed_secret(self) -> Optional[Code]:
        """The secret, but only once the game has ended."""
        if self.status == "playing":
            return None
        return self.secret

    def guess(self, code: Code) -> Optional[GuessEntry]:
        if self.status != "playing":
            # game already ended, ignore extra guesses
            return None

        result = versus_feedback(self.secret, code, self.guesses_remaining)

        entry = GuessEntry(
            guess=code,
            bulls=result.score.bulls,
            cows=result.score.cows,
            feedback=result.feedback,
        )
        self.history.insert(0, entry)
        self.guesses_remaining = result.guesses_remaining

        if result.is_correct_guess:
            self.status = "won"
        elif result.has_lost:
            self.status = "lost"

        self.updated_at = time()
        return entry

    def reset(self, secret: Code) -> None:
        validate_code(secret)
        self.secret = secret
        self.guesses_remaining = self.max_guesses
        self.status = "playing"
        self.history = []
        self.updated_at = time()
